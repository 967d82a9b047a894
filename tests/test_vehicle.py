#!/usr/bin/env python3
"""Tests for Vehicle facts."""

from datetime import date

import pytest

from maintenance import Vehicle
from maintenance.vehicle import require_vehicle


class TestVehicle:
    """Tests for Vehicle construction and helpers."""

    def test_name(self):
        assert Vehicle("Toyota", "Camry", 2020).name == "2020 Toyota Camry"

    def test_mileage_defaults_to_zero(self):
        assert Vehicle("Toyota", "Camry", 2020).current_mileage == 0
        assert Vehicle("Toyota", "Camry", 2020, None).current_mileage == 0

    def test_negative_mileage_rejected(self):
        with pytest.raises(ValueError):
            Vehicle("Toyota", "Camry", 2020, -1)

    def test_reference_date_is_purchase_date(self):
        vehicle = Vehicle("Toyota", "Camry", 2020, 0, date(2020, 5, 1))
        assert vehicle.reference_date(date(2025, 3, 15)) == date(2020, 5, 1)

    def test_reference_date_defaults_to_today(self):
        vehicle = Vehicle("Toyota", "Camry", 2020)
        assert vehicle.reference_date(date(2025, 3, 15)) == date(2025, 3, 15)

    def test_purchased_in_year_of(self):
        today = date(2025, 3, 15)
        assert Vehicle("Toyota", "Camry", 2020).purchased_in_year_of(today)
        assert Vehicle("Toyota", "Camry", 2020, 0, date(2025, 1, 2)).purchased_in_year_of(today)
        assert not Vehicle("Toyota", "Camry", 2020, 0, date(2024, 12, 31)).purchased_in_year_of(today)


class TestRequireVehicle:
    def test_accepts_vehicle(self):
        vehicle = Vehicle("Toyota", "Camry", 2020)
        assert require_vehicle(vehicle) is vehicle

    def test_rejects_dict(self):
        with pytest.raises(TypeError):
            require_vehicle({"make": "Toyota", "model": "Camry", "year": 2020})
