"""
DataMailboxRepository: tabular access to DataMailbox history.
Flattens decoded responses into pandas DataFrames and walks the
syncdata cursor without keeping any state of its own.
"""

import logging
import pandas as pd
from typing import Iterator, Mapping, Optional, Sequence
from pathlib import Path

from .api_client import DataMailboxClient
from .models import Device, DeviceHistory, SyncResponse
from .config import DataMailboxConfig, load_config

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = [
    'device_id', 'device_name', 'tag_id', 'tag_name',
    'date', 'value', 'quality', 'data_type'
]
DEVICE_COLUMNS = ['id', 'name', 'last_synchro_date', 'time_zone', 'tag_count']


def iter_sync(client: DataMailboxClient, last_transaction_id: str = "") -> Iterator[SyncResponse]:
    """
    Yield syncdata pages until the service reports no more data.

    Starts a new transaction when no cursor is given. The cursor to
    resume from later is the transaction_id of the last page yielded.

    Args:
        client: DataMailbox client
        last_transaction_id: Cursor from a previous sync, if any

    Yields:
        SyncResponse pages in retrieval order
    """
    if last_transaction_id:
        page = client.sync_data(last_transaction_id, False)
    else:
        page = client.first_sync_data()

    while True:
        yield page
        if not page.more_data_available:
            break
        logger.debug("More data available after transaction %s", page.transaction_id)
        page = client.sync_data(page.transaction_id, False)


def history_to_dataframe(devices: Sequence[DeviceHistory]) -> pd.DataFrame:
    """
    Flatten devices-with-history into one row per history sample.

    Samples keep the order the service returned them in.

    Args:
        devices: Devices from a DataResponse or SyncResponse

    Returns:
        DataFrame with HISTORY_COLUMNS
    """
    rows = [
        {
            'device_id': device.id,
            'device_name': device.name,
            'tag_id': tag.id,
            'tag_name': tag.name,
            'date': sample.date,
            'value': sample.value,
            'quality': sample.quality,
            'data_type': sample.data_type or tag.data_type
        }
        for device in devices
        for tag in device.tags
        for sample in tag.history
    ]
    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    df['date'] = pd.to_datetime(df['date'], utc=True)
    return df


def devices_to_dataframe(devices: Sequence[Device]) -> pd.DataFrame:
    """One row per device."""
    rows = [
        {
            'id': d.id,
            'name': d.name,
            'last_synchro_date': d.last_synchro_date,
            'time_zone': d.time_zone,
            'tag_count': len(d.tags)
        }
        for d in devices
    ]
    df = pd.DataFrame(rows, columns=DEVICE_COLUMNS)
    df['last_synchro_date'] = pd.to_datetime(df['last_synchro_date'], utc=True)
    return df


class DataMailboxRepository:
    """
    DataFrame-oriented access to a DataMailbox account.
    Holds a client only; no cache and no sync cursor.
    """

    def __init__(self, client: DataMailboxClient):
        self.client = client

    @classmethod
    def from_config(cls, config_path: Optional[str | Path] = None) -> 'DataMailboxRepository':
        """
        Create repository from configuration file.

        Args:
            config_path: Path to configuration file

        Returns:
            Configured DataMailboxRepository instance
        """
        config: DataMailboxConfig = load_config(config_path)
        return cls(DataMailboxClient.from_config(config))

    def get_devices_frame(self) -> pd.DataFrame:
        """Device inventory as a DataFrame."""
        return devices_to_dataframe(self.client.get_devices())

    def get_history_frame(self, params: Optional[Mapping[str, str]] = None) -> pd.DataFrame:
        """
        Run a one-shot getdata query and flatten the result.

        Args:
            params: getdata query parameters, e.g. {"ewonId": "508238", "from": "..."}

        Returns:
            DataFrame with HISTORY_COLUMNS
        """
        response = self.client.get_data(params)
        if response.more_data_available:
            logger.info("getdata returned a partial result; more data is available")
        return history_to_dataframe(response.devices)

    def sync_history_frames(self, last_transaction_id: str = "") -> Iterator[tuple[str, pd.DataFrame]]:
        """
        Walk the sync cursor, yielding (transaction_id, frame) per page.

        Args:
            last_transaction_id: Cursor from a previous sync, if any

        Yields:
            The page's transaction id and its history as a DataFrame
        """
        for page in iter_sync(self.client, last_transaction_id):
            yield page.transaction_id, history_to_dataframe(page.devices)
