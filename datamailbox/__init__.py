"""
Client library for the Talk2M DataMailbox (DMWeb) service.

The DataMailbox collects telemetry uploaded by remote eWON gateways.
This package authenticates requests with Talk2M account credentials,
decodes responses into typed models and raises typed errors for
service failures.

Architecture:
- API Client: credential-bearing requests, error mapping, typed operations
- Models: Pydantic models for every response shape
- Repository: sync-cursor iteration and pandas DataFrame views
- Config: YAML-based configuration management
- Logging: logging setup from configuration

Example Usage:
    from datamailbox import DataMailboxClient, iter_sync

    client = DataMailboxClient(None, "account", "user", "password", "devid")
    for device in client.get_devices():
        print(device.id, device.name)

    for page in iter_sync(client, last_transaction_id=saved_cursor):
        handle(page.devices)
        saved_cursor = page.transaction_id
"""

from .models import (
    Tag,
    Device,
    HistorySample,
    TagHistory,
    DeviceHistory,
    DeviceStatus,
    StatusResponse,
    DevicesResponse,
    DataResponse,
    SyncResponse,
    ErrorResponse
)

from .api_client import (
    DataMailboxClient,
    DataMailboxError,
    DataMailboxAPIError,
    MissingCredentialsError,
    InvalidArgumentError
)

from .repository import (
    DataMailboxRepository,
    iter_sync,
    history_to_dataframe,
    devices_to_dataframe
)

from .config import (
    DataMailboxConfig,
    APISettings,
    LoggingSettings,
    load_config,
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT
)

from .logging_config import setup_logging

__all__ = [
    # Client
    'DataMailboxClient',

    # Repository
    'DataMailboxRepository',
    'iter_sync',
    'history_to_dataframe',
    'devices_to_dataframe',

    # Models
    'Tag',
    'Device',
    'HistorySample',
    'TagHistory',
    'DeviceHistory',
    'DeviceStatus',
    'StatusResponse',
    'DevicesResponse',
    'DataResponse',
    'SyncResponse',
    'ErrorResponse',

    # Configuration
    'DataMailboxConfig',
    'APISettings',
    'LoggingSettings',
    'load_config',
    'setup_logging',
    'DEFAULT_BASE_URL',
    'DEFAULT_USER_AGENT',

    # Errors
    'DataMailboxError',
    'DataMailboxAPIError',
    'MissingCredentialsError',
    'InvalidArgumentError',
]

__version__ = '0.1.0'
__description__ = 'Client library for the Talk2M DataMailbox service'
