"""Shared pytest fixtures for flow and navigation tests."""

import pytest


@pytest.fixture
def residential_rent_form():
    """Flat form state as written by the residential rent wizard."""
    return {
        "flow": {"category": "residential", "listingType": "rent"},
        "meta": {"id": "prop-1", "owner_id": "owner-1", "status": "draft"},
        "title": "2BHK in Madhapur",
        "bhkType": "2BHK",
        "builtUpArea": 1100,
        "city": "Hyderabad",
        "locality": "Madhapur",
        "latitude": 17.44,
        "longitude": 78.39,
        "rentAmount": 25000,
        "securityDeposit": 50000,
        "amenities": ["Lift", "Gym"],
        "steps": {},
    }


@pytest.fixture
def pg_hostel_form():
    """PG/Hostel form state with checkbox-style rules and room features."""
    return {
        "flow": {"category": "residential", "listingType": "pghostel"},
        "roomType": "Double",
        "expectedRent": 9000,
        "gender": "Female",
        "noSmoking": True,
        "noNonVeg": True,
        "fan": True,
        "wiFi": True,
        "city": "Bengaluru",
        "steps": {},
    }


@pytest.fixture
def land_sale_form():
    return {
        "steps": {
            "land_sale_basic_details": {"landType": "Residential Plot", "plotLength": 60, "plotWidth": 40},
            "land_sale_location": {"city": "Vizag"},
        },
    }


@pytest.fixture
def make_form():
    """Build a form carrying an explicit flow type, plus any extra fields."""

    def _make(flow_type: str, **fields) -> dict:
        form = {"flow": {"flowType": flow_type}, "steps": {}}
        form.update(fields)
        return form

    return _make
