"""Pytest configuration and shared fixtures"""
import json
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.main import app

FIXED_TIME = datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def client():
    """Create FastAPI test client"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same timestamp"""
    return lambda: FIXED_TIME


@pytest.fixture
def survey_records():
    """Household survey submissions with a mix of good and bad answers"""
    return [
        {
            "_id": "uuid:0001",
            "respondent_name": "Amina",
            "region": "Nairobi",
            "household_size": "4",
            "interview_date": "2024-03-01",
            "status": "complete",
        },
        {
            "_id": "uuid:0002",
            "respondent_name": "",
            "region": "Kisumu",
            "household_size": "five",
            "interview_date": "2024-03-02",
            "status": "incomplete",
        },
        {
            "_id": "uuid:0003",
            "respondent_name": "Otieno",
            "region": "Nairobi",
            "household_size": 6,
            "interview_date": "yesterday",
            "status": "complete",
        },
    ]


@pytest.fixture
def survey_rules():
    """Rules matching the household survey"""
    return {
        "requiredFields": ["respondent_name", "region"],
        "dataTypes": {"household_size": "number", "interview_date": "date"},
    }


@pytest.fixture
def sample_csv_comma():
    """Create CSV export with comma delimiter"""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False) as tmp:
        tmp.write("respondent_name,region,household_size,status\n")
        tmp.write("Amina,Nairobi,4,complete\n")
        tmp.write("Otieno,Kisumu,,incomplete\n")
        tmp.flush()
        yield tmp.name

    Path(tmp.name).unlink(missing_ok=True)


@pytest.fixture
def sample_csv_semicolon():
    """Create CSV export with semicolon delimiter"""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False) as tmp:
        tmp.write("respondent_name;region;household_size\n")
        tmp.write("Amina;Nairobi;4\n")
        tmp.write("Otieno;Kisumu;3\n")
        tmp.flush()
        yield tmp.name

    Path(tmp.name).unlink(missing_ok=True)


@pytest.fixture
def sample_json_envelope():
    """Create JSON export in OData envelope form"""
    payload = {
        "value": [
            {
                "__id": "uuid:0001",
                "__system": {"submissionDate": "2024-03-01T09:00:00.000Z"},
                "region": "Nairobi",
                "status": "complete",
            },
            {
                "__id": "uuid:0002",
                "__system": {"submissionDate": "2024-03-05T09:00:00.000Z"},
                "region": "Kisumu",
                "status": "incomplete",
            },
        ]
    }
    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as tmp:
        json.dump(payload, tmp)
        tmp.flush()
        yield tmp.name

    Path(tmp.name).unlink(missing_ok=True)
