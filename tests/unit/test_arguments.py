"""Tests for tool argument validation."""

from __future__ import annotations

import pytest

from smartlead_mcp.core.errors import InvalidParamsError
from smartlead_mcp.core.result import Err, Ok
from smartlead_mcp.tools.arguments import (
    MAX_BULK_LEADS,
    AddLeadArgs,
    AddLeadsArgs,
    CampaignRef,
    CreateCampaignArgs,
    ListCampaignsArgs,
    SaveCampaignSequenceArgs,
    UpdateCampaignScheduleArgs,
    UpdateLeadArgs,
    validate_arguments,
)


def _leads(n: int) -> list[dict[str, str]]:
    return [{"email": f"lead{i}@example.com"} for i in range(n)]


def _error(outcome) -> InvalidParamsError:
    assert isinstance(outcome, Err)
    assert isinstance(outcome.error, InvalidParamsError)
    return outcome.error


# ─── Absent and malformed bags ────────────────────────────────


class TestMissingArguments:
    def test_none_rejected(self):
        err = _error(validate_arguments("smartlead_get_campaign", CampaignRef, None))
        assert err.tool == "smartlead_get_campaign"
        assert "No arguments provided" in str(err)

    def test_none_rejected_even_when_all_optional(self):
        outcome = validate_arguments("smartlead_list_campaigns", ListCampaignsArgs, None)
        assert isinstance(outcome, Err)

    def test_empty_bag_allowed_when_all_optional(self):
        outcome = validate_arguments("smartlead_list_campaigns", ListCampaignsArgs, {})
        assert isinstance(outcome, Ok)
        assert outcome.value.payload() == {}

    def test_non_mapping_rejected(self):
        outcome = validate_arguments("smartlead_get_campaign", CampaignRef, [1, 2])
        assert isinstance(outcome, Err)


# ─── Scalar fields ────────────────────────────────────────────


class TestScalarFields:
    def test_missing_required_names_field(self):
        err = _error(validate_arguments("smartlead_get_campaign", CampaignRef, {}))
        assert "Invalid arguments for smartlead_get_campaign" in str(err)
        assert "campaign_id" in str(err)

    def test_string_id_not_coerced(self):
        outcome = validate_arguments(
            "smartlead_get_campaign", CampaignRef, {"campaign_id": "42"}
        )
        assert isinstance(outcome, Err)

    def test_bool_is_not_a_number(self):
        outcome = validate_arguments(
            "smartlead_get_campaign", CampaignRef, {"campaign_id": True}
        )
        assert isinstance(outcome, Err)

    def test_float_id_rejected(self):
        outcome = validate_arguments(
            "smartlead_get_campaign", CampaignRef, {"campaign_id": 4.2}
        )
        assert isinstance(outcome, Err)

    def test_number_fields_accept_floats(self):
        outcome = validate_arguments(
            "smartlead_update_campaign_schedule",
            UpdateCampaignScheduleArgs,
            {"campaign_id": 1, "min_time_btw_emails": 7.5},
        )
        assert isinstance(outcome, Ok)
        assert outcome.value.min_time_btw_emails == 7.5

    def test_name_must_be_string(self):
        outcome = validate_arguments(
            "smartlead_create_campaign", CreateCampaignArgs, {"name": 3}
        )
        assert isinstance(outcome, Err)

    def test_unknown_status_rejected(self):
        outcome = validate_arguments(
            "smartlead_list_campaigns", ListCampaignsArgs, {"status": "archived"}
        )
        assert "status" in str(_error(outcome))

    def test_negative_offset_rejected(self):
        outcome = validate_arguments(
            "smartlead_list_campaigns", ListCampaignsArgs, {"offset": -1}
        )
        assert isinstance(outcome, Err)


# ─── Payloads ─────────────────────────────────────────────────


class TestPayload:
    def test_only_provided_fields(self):
        outcome = validate_arguments(
            "smartlead_update_campaign_schedule",
            UpdateCampaignScheduleArgs,
            {"campaign_id": 9, "timezone": "UTC"},
        )
        assert outcome.value.payload("campaign_id") == {"timezone": "UTC"}

    def test_explicit_null_is_kept(self):
        outcome = validate_arguments(
            "smartlead_create_campaign",
            CreateCampaignArgs,
            {"name": "Q3", "client_id": None},
        )
        assert outcome.value.payload() == {"name": "Q3", "client_id": None}

    def test_extra_keys_forwarded(self):
        outcome = validate_arguments(
            "smartlead_create_campaign",
            CreateCampaignArgs,
            {"name": "Q3", "track_opens": True},
        )
        assert outcome.value.payload() == {"name": "Q3", "track_opens": True}


# ─── Nested structures ────────────────────────────────────────


class TestNested:
    def test_sequence_steps_validated(self):
        outcome = validate_arguments(
            "smartlead_save_campaign_sequence",
            SaveCampaignSequenceArgs,
            {"campaign_id": 1, "sequence": [{"subject": "Hi"}]},
        )
        assert "sequence.0.body" in str(_error(outcome))

    def test_sequence_must_be_list(self):
        outcome = validate_arguments(
            "smartlead_save_campaign_sequence",
            SaveCampaignSequenceArgs,
            {"campaign_id": 1, "sequence": {"subject": "a", "body": "b"}},
        )
        assert isinstance(outcome, Err)

    def test_lead_requires_email(self):
        outcome = validate_arguments(
            "smartlead_add_lead_to_campaign",
            AddLeadArgs,
            {"campaign_id": 1, "lead": {"first_name": "Ada"}},
        )
        assert "lead.email" in str(_error(outcome))

    def test_lead_custom_fields_kept(self):
        outcome = validate_arguments(
            "smartlead_add_lead_to_campaign",
            AddLeadArgs,
            {
                "campaign_id": 1,
                "lead": {"email": "a@b.co", "phone": "555", "custom_variables": {"x": 1}},
            },
        )
        assert outcome.value.payload()["lead"] == {
            "email": "a@b.co",
            "phone": "555",
            "custom_variables": {"x": 1},
        }

    def test_lead_update_email_optional(self):
        outcome = validate_arguments(
            "smartlead_update_lead_in_campaign",
            UpdateLeadArgs,
            {"campaign_id": 1, "lead_id": 2, "lead": {"company": "Acme"}},
        )
        assert outcome.value.payload()["lead"] == {"company": "Acme"}


# ─── Bulk leads ───────────────────────────────────────────────


class TestBulkLeads:
    @pytest.mark.parametrize("count", [1, MAX_BULK_LEADS])
    def test_within_bounds(self, count):
        outcome = validate_arguments(
            "smartlead_add_leads_to_campaign",
            AddLeadsArgs,
            {"campaign_id": 1, "leads": _leads(count)},
        )
        assert isinstance(outcome, Ok)
        assert len(outcome.value.leads) == count

    @pytest.mark.parametrize("count", [0, MAX_BULK_LEADS + 1])
    def test_out_of_bounds(self, count):
        outcome = validate_arguments(
            "smartlead_add_leads_to_campaign",
            AddLeadsArgs,
            {"campaign_id": 1, "leads": _leads(count)},
        )
        assert "leads" in str(_error(outcome))

    def test_every_lead_validated(self):
        leads = _leads(3)
        del leads[2]["email"]
        outcome = validate_arguments(
            "smartlead_add_leads_to_campaign",
            AddLeadsArgs,
            {"campaign_id": 1, "leads": leads},
        )
        assert "leads.2.email" in str(_error(outcome))
