"""
Talk2M DataMailbox (DMWeb) API client.
Builds credential-bearing requests, maps error envelopes to exceptions
and decodes responses into typed models.
"""

import logging
import requests
from typing import Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

from .config import DataMailboxConfig, DEFAULT_BASE_URL, DEFAULT_USER_AGENT
from .models import (
    Device,
    DevicesResponse,
    DataResponse,
    ErrorResponse,
    StatusResponse,
    SyncResponse
)

logger = logging.getLogger(__name__)

CREDENTIAL_PARAMS = ('t2maccount', 't2musername', 't2mpassword', 't2mdevid')

Params = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


class DataMailboxError(Exception):
    """Base exception for DataMailbox client errors."""
    pass


class MissingCredentialsError(DataMailboxError):
    """Raised when a client is built without all four credentials."""
    pass


class InvalidArgumentError(DataMailboxError, TypeError):
    """Raised when a lookup receives an identifier of the wrong kind."""
    pass


class DataMailboxAPIError(DataMailboxError):
    """
    Raised when the service answers with a non-200 status.

    str(error) is the message sent by the service; the numeric code
    and the HTTP status are kept as attributes.
    """

    def __init__(self, message: str, code: int = 0, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class DataMailboxClient:
    """
    Client for the DataMailbox HTTP API.

    Holds only immutable configuration; it keeps no sync cursor and no
    cache. Concurrent use is as safe as the session it is given.
    """

    def __init__(
        self,
        session: Optional[requests.Session],
        account_id: str,
        username: str,
        password: str,
        developer_id: str
    ):
        """
        Initialize the client.

        Args:
            session: Pre-configured requests session, owned by the caller
                (None creates one owned and closed by the client)
            account_id: Talk2M account name
            username: Talk2M username
            password: Talk2M password
            developer_id: Talk2M developer id

        Raises:
            MissingCredentialsError: If any credential is empty
        """
        if not (account_id and username and password and developer_id):
            raise MissingCredentialsError("missing one or more credentials")

        # Only a session created here is closed by close()
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.account_id = account_id
        self.username = username
        self.password = password
        self.developer_id = developer_id
        self.base_url = DEFAULT_BASE_URL
        self.user_agent = DEFAULT_USER_AGENT

    @classmethod
    def from_config(
        cls,
        config: DataMailboxConfig,
        session: Optional[requests.Session] = None
    ) -> 'DataMailboxClient':
        """
        Create API client from configuration.

        Args:
            config: DataMailboxConfig object
            session: Optional pre-configured requests session

        Returns:
            Configured DataMailboxClient instance
        """
        client = cls(
            session=session,
            account_id=config.api.account_id,
            username=config.api.username,
            password=config.api.password,
            developer_id=config.api.developer_id
        )
        client.base_url = config.api.base_url
        client.user_agent = config.api.user_agent
        return client

    def _query_pairs(self, params: Optional[Params]) -> List[Tuple[str, str]]:
        pairs = [
            ('t2maccount', self.account_id),
            ('t2musername', self.username),
            ('t2mpassword', self.password),
            ('t2mdevid', self.developer_id),
        ]
        if params:
            items = params.items() if isinstance(params, Mapping) else params
            # Appended after the credentials, never replacing them
            pairs.extend((str(k), str(v)) for k, v in items)
        return pairs

    def _url(self, endpoint: str, pairs: List[Tuple[str, str]]) -> str:
        return self.base_url + endpoint + "?" + urlencode(pairs)

    def build_url(self, endpoint: str, params: Optional[Params] = None) -> str:
        """Return the full request URL including credential parameters."""
        return self._url(endpoint, self._query_pairs(params))

    def request(self, endpoint: str, params: Optional[Params] = None) -> requests.Response:
        """
        Perform an authenticated GET against an endpoint.

        The returned response is live; use it as a context manager so the
        body is released even when decoding fails.

        Args:
            endpoint: Endpoint name (e.g. "getewons")
            params: Extra query parameters

        Returns:
            The successful (HTTP 200) response

        Raises:
            DataMailboxAPIError: If the service answers with a non-200 status
            requests.RequestException: On transport failure
            ValueError: If an error envelope cannot be decoded
        """
        # params may be a one-shot iterator; read it exactly once
        pairs = self._query_pairs(params)
        logger.debug(
            "GET %s params=%s",
            endpoint,
            [(k, v) for k, v in pairs if k not in CREDENTIAL_PARAMS]
        )

        response = self.session.get(
            self._url(endpoint, pairs),
            headers={'User-Agent': self.user_agent},
            stream=True
        )

        if response.status_code != 200:
            with response:
                error = ErrorResponse.model_validate(response.json())
            logger.warning(
                "%s failed with HTTP %s (code %s): %s",
                endpoint, response.status_code, error.code, error.message
            )
            raise DataMailboxAPIError(
                error.message,
                code=error.code,
                status_code=response.status_code
            )

        return response

    def get_status(self) -> StatusResponse:
        """Return the storage consumption of the account and of each device."""
        with self.request('getstatus') as response:
            return StatusResponse.model_validate(response.json())

    def get_devices(self) -> List[Device]:
        """
        List the devices sending data to the DataMailbox.

        Returns:
            Devices with name, id and last upload date
        """
        with self.request('getewons') as response:
            return DevicesResponse.model_validate(response.json()).devices

    def _get_device(self, param: str, value: str) -> Device:
        with self.request('getewon', [(param, value)]) as response:
            # Device fields sit at the top level here, unlike getewons
            return Device.model_validate(response.json())

    def get_device_by_id(self, device_id: int) -> Device:
        """
        Return a single device by id.

        Raises:
            InvalidArgumentError: If device_id is not an int
        """
        if isinstance(device_id, bool) or not isinstance(device_id, int):
            raise InvalidArgumentError(f"device id must be an int, got {type(device_id).__name__}")
        return self._get_device('id', str(device_id))

    def get_device_by_name(self, name: str) -> Device:
        """
        Return a single device by name, as listed by get_devices().

        Raises:
            InvalidArgumentError: If name is not a str
        """
        if not isinstance(name, str):
            raise InvalidArgumentError(f"device name must be a str, got {type(name).__name__}")
        return self._get_device('name', name)

    def get_data(self, params: Optional[Mapping[str, str]] = None) -> DataResponse:
        """
        One-shot retrieval of data filtered on specific criteria.

        Not meant for large historical pulls; use sync_data for those.
        Parameters are passed through verbatim:
          * ewonId: single device to return data for
          * tagId: single tag to return data for
          * from / to: timestamp bounds
          * fullConfig: include devices and tags without history (no value)
          * limit: maximum number of history samples

        When the limit is hit, the oldest samples are returned and
        more_data_available is set.

        Args:
            params: Query parameters

        Returns:
            DataResponse with devices and their history
        """
        with self.request('getdata', params) as response:
            return DataResponse.model_validate(response.json())

    def first_sync_data(self) -> SyncResponse:
        """Start incremental retrieval with a fresh transaction."""
        return self.sync_data("", True)

    def sync_data(self, last_transaction_id: str = "", create_transaction: bool = False) -> SyncResponse:
        """
        Incrementally retrieve all data of the account.

        Only data newer than last_transaction_id is returned. Persist the
        returned transaction_id and pass it to the next call; stop when
        more_data_available is False.

        Args:
            last_transaction_id: Cursor returned by the previous call
            create_transaction: Ask the server for a new transaction id

        Returns:
            SyncResponse with the new cursor and the data
        """
        params = []
        if last_transaction_id:
            params.append(('lastTransactionId', last_transaction_id))
        if create_transaction:
            params.append(('createTransaction', 'true'))

        with self.request('syncdata', params) as response:
            return SyncResponse.model_validate(response.json())

    def close(self) -> None:
        """
        Close the session if the client created it.

        A session passed in by the caller stays open; the caller owns it.
        """
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
