#!/usr/bin/env python3
"""Tests for Policy configuration."""

import pytest

from maintenance import DEFAULT_POLICY, Policy


class TestPolicyDefaults:
    """Tests for default policy values."""

    def test_defaults(self):
        assert DEFAULT_POLICY.annual_distance == 12000
        assert DEFAULT_POLICY.horizon == 20000
        assert DEFAULT_POLICY.match_tolerance == 500
        assert DEFAULT_POLICY.reminder_window == 1000
        assert DEFAULT_POLICY.distance_unit == "mi"


class TestPolicyValidation:
    """Non-positive or non-numeric values are rejected."""

    def test_zero_rejected(self):
        with pytest.raises(ValueError):
            Policy(horizon=0)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            Policy(annual_distance=-12000)

    def test_non_number_rejected(self):
        with pytest.raises(ValueError):
            Policy(match_tolerance="500")

    def test_horizon_shorter_than_generic_interval_rejected(self):
        with pytest.raises(ValueError, match="horizon"):
            Policy(horizon=5000)

    def test_horizon_equal_to_generic_interval_allowed(self):
        assert Policy(horizon=10000).horizon == 10000


class TestPolicyFromDict:
    """Tests for reading the policy section of a vehicle file."""

    def test_none_gives_defaults(self):
        assert Policy.from_dict(None) == Policy()

    def test_camel_case_keys(self):
        policy = Policy.from_dict({"annualDistance": 15000, "distanceUnit": "km"})
        assert policy.annual_distance == 15000
        assert policy.distance_unit == "km"
        assert policy.horizon == 20000

    def test_unknown_key_raises(self):
        with pytest.raises(ValueError, match="milesPerYear"):
            Policy.from_dict({"milesPerYear": 15000})

    def test_to_dict_only_non_defaults(self):
        policy = Policy(horizon=30000)
        assert policy.to_dict() == {"horizon": 30000}
        assert Policy.from_dict(policy.to_dict()) == policy
