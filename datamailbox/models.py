"""
Pydantic models for DataMailbox responses.
Wire names are camelCase (and call devices "ewons"); attributes are snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List


class DataMailboxModel(BaseModel):
    """Base model accepting wire aliases and ignoring unknown fields."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class Tag(DataMailboxModel):
    """A single monitored variable on a device."""
    id: int = Field(default=0, description="DataMailbox tag identifier")
    name: str = Field(default="", description="Tag name")
    data_type: str = Field(default="", alias="dataType", description="Data type label (e.g. Float)")
    description: str = Field(default="", description="Free-text description")
    alarm_hint: str = Field(default="", alias="alarmHint", description="Alarm hint label")
    value: float = Field(default=0.0, description="Current value")
    quality: str = Field(default="", description="Quality label (e.g. good)")
    ewon_tag_id: int = Field(default=0, alias="ewonTagId", description="Tag id local to the device")


class Device(DataMailboxModel):
    """A remote gateway sending data to the DataMailbox."""
    id: int = Field(default=0, description="Device identifier")
    name: str = Field(default="", description="Device name")
    last_synchro_date: Optional[datetime] = Field(
        default=None,
        alias="lastSynchroDate",
        description="Last upload to the DataMailbox; None if the device never uploaded"
    )
    time_zone: Optional[str] = Field(
        default=None,
        alias="timeZone",
        description="Time zone label; absent when the service uses its default convention"
    )
    tags: List[Tag] = Field(default_factory=list)


class HistorySample(DataMailboxModel):
    """One timestamped value recorded for a tag."""
    date: Optional[datetime] = Field(default=None)
    value: float = Field(default=0.0)
    quality: str = Field(default="")
    data_type: str = Field(default="", alias="dataType")


class TagHistory(Tag):
    """Tag carrying the history samples returned by getdata/syncdata."""
    history: List[HistorySample] = Field(default_factory=list)


class DeviceHistory(Device):
    """Device whose tags carry history samples."""
    tags: List[TagHistory] = Field(default_factory=list)


class DeviceStatus(DataMailboxModel):
    """Storage consumption of a single device."""
    id: int = 0
    name: str = ""
    history_count: int = Field(default=0, alias="historyCount")
    # Absent while the device has no history yet
    first_history_date: Optional[datetime] = Field(default=None, alias="firstHistoryDate")
    last_history_date: Optional[datetime] = Field(default=None, alias="lastHistoryDate")


class StatusResponse(DataMailboxModel):
    """Storage consumption of the account and of each device."""
    history_count: int = Field(default=0, alias="historyCount")
    devices_count: int = Field(default=0, alias="ewonsCount")
    devices: List[DeviceStatus] = Field(default_factory=list, alias="ewons")


class DevicesResponse(DataMailboxModel):
    """Envelope of the getewons endpoint."""
    success: bool = True
    devices: List[Device] = Field(default_factory=list, alias="ewons")


class DataResponse(DataMailboxModel):
    """Result of a one-shot getdata query."""
    success: bool = True
    more_data_available: bool = Field(default=False, alias="moreDataAvailable")
    devices: List[DeviceHistory] = Field(default_factory=list, alias="ewons")


class SyncResponse(DataResponse):
    """
    Result of an incremental syncdata call.

    transaction_id is the cursor to pass to the next call; callers
    persist it themselves.
    """
    transaction_id: str = Field(default="", alias="transactionId")


class ErrorResponse(DataMailboxModel):
    """Error envelope returned with non-200 statuses."""
    success: bool = False
    code: int = 0
    message: str = ""
