"""
Shared fixtures: a mocked requests.Session and canned DataMailbox payloads.
"""

import io
import pytest
import requests
from unittest.mock import Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datamailbox import DataMailboxClient


def build_response(body: str, status_code: int = 200) -> requests.Response:
    """Build a real requests.Response whose body streams from memory."""
    response = requests.Response()
    response.status_code = status_code
    response.headers['Content-Type'] = 'application/json;charset=UTF-8'
    response.encoding = 'utf-8'
    response.raw = io.BytesIO(body.encode('utf-8'))
    return response


@pytest.fixture
def make_response():
    """Factory fixture for canned responses."""
    return build_response


@pytest.fixture
def session():
    """Mocked transport; tests set get.return_value or get.side_effect."""
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    """Client wired to the mocked session."""
    return DataMailboxClient(session, "aid", "username", "password", "devid")


@pytest.fixture
def unauthorized_body():
    return '{"success":false,"code":401,"message":"Invalid credentials"}'


@pytest.fixture
def status_body():
    return """{
        "historyCount": 20732,
        "ewonsCount": 2,
        "ewons": [{
            "id": 2,
            "name": "Paris",
            "historyCount": 2702,
            "firstHistoryDate": "2015-07-16T16:04:25Z",
            "lastHistoryDate": "2015-07-17T17:43:36Z"
        }, {
            "id": 190,
            "name": "Brussels",
            "historyCount": 18030,
            "firstHistoryDate": "2015-08-24T08:56:44Z",
            "lastHistoryDate": "2015-08-24T14:57:13Z"
        }]
    }"""


@pytest.fixture
def devices_body():
    return (
        '{"success":true,"ewons":['
        '{"id":123456,"name":"Ewon1","lastSynchroDate":"2017-07-08T10:51:28Z"},'
        '{"id":123457,"name":"Ewon2","lastSynchroDate":"2018-06-05T12:49:27Z"}]}'
    )


@pytest.fixture
def devices_with_timezone_body():
    return (
        '{"success":true,"ewons":[{"id":123456,"name":"Ewon1",'
        '"timeZone":"Europe/Brussels","lastSynchroDate":"2017-07-08T10:51:28Z"}]}'
    )


@pytest.fixture
def device_body():
    return """{
        "success": true,
        "id": 123456,
        "name": "Ewon1",
        "tags": [{
            "id": 98765,
            "name": "Random_Metric",
            "dataType": "Float",
            "description": "",
            "alarmHint": "",
            "value": 1234.4567,
            "quality": "good",
            "ewonTagId": 10
        }],
        "lastSynchroDate": "2018-06-05T12:49:27Z"
    }"""


def _history_payload(extra: str) -> str:
    return """{
        "success": true,
        %s
        "ewons": [{
            "id": 508238,
            "name": "ltn_flexy",
            "tags": [{
                "id": 780591,
                "name": "TAG_2",
                "dataType": "Float",
                "description": "",
                "alarmHint": "",
                "value": 1510,
                "quality": "good",
                "ewonTagId": 2,
                "history": [
                    {"date": "2018-11-08T14:17:58Z", "quality": "initialGood", "value": 0},
                    {"date": "2018-11-08T14:18:00Z", "value": 0},
                    {"date": "2018-11-08T14:18:02Z", "value": 0},
                    {"date": "2018-11-08T14:18:04Z", "value": 0},
                    {"date": "2018-11-08T14:18:06Z", "value": 0}
                ]
            }],
            "lastSynchroDate": "2018-11-09T09:47:00Z",
            "timeZone": "Europe/Brussels"
        }]
    }""" % extra


@pytest.fixture
def data_body():
    return _history_payload('"moreDataAvailable": true,')


@pytest.fixture
def first_sync_body():
    return _history_payload('"transactionId": "456789", "moreDataAvailable": true,')


@pytest.fixture
def next_sync_body():
    return _history_payload('"transactionId": "987654", "moreDataAvailable": false,')
