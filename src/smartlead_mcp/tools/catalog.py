"""Smartlead tool catalog.

Each :class:`ToolSpec` ties a tool name to its published JSON schema, the
argument model that validates calls to it, and the builder that turns
validated arguments into exactly one HTTP request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from smartlead_mcp.tools import arguments as a

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True, slots=True)
class RemoteRequest:
    """One HTTP call against the Smartlead API."""

    method: str
    path: str
    context: str
    body: Any = None
    query: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Schema definition and dispatch entry for one tool."""

    name: str
    description: str
    input_schema: dict[str, Any]
    arguments: type[a.ToolArguments]
    build: Callable[[Any], RemoteRequest]


# ─── Schema fragments ─────────────────────────────────────────


def _int(description: str) -> dict[str, Any]:
    return {"type": "integer", "description": description}


def _num(description: str) -> dict[str, Any]:
    return {"type": "number", "description": description}


def _str(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _obj(description: str) -> dict[str, Any]:
    return {"type": "object", "description": description}


def _schema(
    properties: dict[str, Any], required: list[str] | None = None
) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


_LEAD_PROPERTIES: dict[str, Any] = {
    "email": _str("Email address of the lead"),
    "first_name": _str("First name of the lead"),
    "last_name": _str("Last name of the lead"),
    "company": _str("Company of the lead"),
    "custom_variables": _obj("Custom variables for the lead"),
}

_LEAD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": _LEAD_PROPERTIES,
    "required": ["email"],
}


# ─── Tools ────────────────────────────────────────────────────

_CATALOG: tuple[ToolSpec, ...] = (
    # Campaign management
    ToolSpec(
        name="smartlead_create_campaign",
        description="Create a new campaign in Smartlead.",
        input_schema=_schema(
            {
                "name": _str("Name of the campaign"),
                "client_id": _int("Client ID for the campaign"),
            },
            ["name"],
        ),
        arguments=a.CreateCampaignArgs,
        build=lambda args: RemoteRequest(
            "POST", "/campaigns/create", "create campaign", body=args.payload()
        ),
    ),
    ToolSpec(
        name="smartlead_update_campaign_schedule",
        description="Update a campaign's schedule settings.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign to update"),
                "timezone": _str(
                    'Timezone for the campaign (e.g., "America/Los_Angeles")'
                ),
                "days_of_the_week": {
                    "type": "array",
                    "items": {"type": "integer"},
                    "description": (
                        "Days of the week to send emails (1-7, where 1 is Monday)"
                    ),
                },
                "start_hour": _str('Start hour in 24-hour format (e.g., "09:00")'),
                "end_hour": _str('End hour in 24-hour format (e.g., "17:00")'),
                "min_time_btw_emails": _num("Minimum time between emails in minutes"),
                "max_new_leads_per_day": _int("Maximum number of new leads per day"),
                "schedule_start_time": _str("Schedule start time in ISO format"),
            },
            ["campaign_id"],
        ),
        arguments=a.UpdateCampaignScheduleArgs,
        build=lambda args: RemoteRequest(
            "POST",
            f"/campaigns/{args.campaign_id}",
            "update campaign schedule",
            body=args.payload("campaign_id"),
        ),
    ),
    ToolSpec(
        name="smartlead_update_campaign_settings",
        description="Update a campaign's general settings.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign to update"),
                "name": _str("New name for the campaign"),
                "status": {
                    "type": "string",
                    "enum": ["active", "paused", "completed"],
                    "description": "Status of the campaign",
                },
                "settings": _obj("Additional campaign settings"),
            },
            ["campaign_id"],
        ),
        arguments=a.UpdateCampaignSettingsArgs,
        build=lambda args: RemoteRequest(
            "PATCH",
            f"/campaigns/{args.campaign_id}",
            "update campaign settings",
            body=args.payload("campaign_id"),
        ),
    ),
    ToolSpec(
        name="smartlead_get_campaign",
        description="Get details of a specific campaign by ID.",
        input_schema=_schema(
            {"campaign_id": _int("ID of the campaign to retrieve")},
            ["campaign_id"],
        ),
        arguments=a.CampaignRef,
        build=lambda args: RemoteRequest(
            "GET", f"/campaigns/{args.campaign_id}", "get campaign"
        ),
    ),
    ToolSpec(
        name="smartlead_list_campaigns",
        description="List all campaigns with optional filtering.",
        input_schema=_schema(
            {
                "status": {
                    "type": "string",
                    "enum": ["active", "paused", "completed", "all"],
                    "description": "Filter campaigns by status",
                },
                "limit": _int("Maximum number of campaigns to return"),
                "offset": _int("Offset for pagination"),
            }
        ),
        arguments=a.ListCampaignsArgs,
        build=lambda args: RemoteRequest(
            "GET", "/campaigns", "list campaigns", query=args.payload()
        ),
    ),
    # Campaign sequences
    ToolSpec(
        name="smartlead_save_campaign_sequence",
        description="Save a sequence of emails for a campaign.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "sequence": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "subject": _str("Email subject line"),
                            "body": _str("Email body content"),
                            "wait_days": _num("Days to wait before sending this email"),
                        },
                        "required": ["subject", "body"],
                    },
                    "description": "Sequence of emails to send",
                },
            },
            ["campaign_id", "sequence"],
        ),
        arguments=a.SaveCampaignSequenceArgs,
        build=lambda args: RemoteRequest(
            "POST",
            f"/campaigns/{args.campaign_id}/sequence",
            "save campaign sequence",
            body={"sequence": args.payload()["sequence"]},
        ),
    ),
    ToolSpec(
        name="smartlead_get_campaign_sequence",
        description="Get the sequence of emails for a campaign.",
        input_schema=_schema(
            {"campaign_id": _int("ID of the campaign")},
            ["campaign_id"],
        ),
        arguments=a.CampaignRef,
        build=lambda args: RemoteRequest(
            "GET", f"/campaigns/{args.campaign_id}/sequence", "get campaign sequence"
        ),
    ),
    ToolSpec(
        name="smartlead_update_campaign_sequence",
        description="Update a specific email in a campaign sequence.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "sequence_id": _int("ID of the sequence email to update"),
                "subject": _str("Updated email subject line"),
                "body": _str("Updated email body content"),
                "wait_days": _num("Updated days to wait before sending this email"),
            },
            ["campaign_id", "sequence_id"],
        ),
        arguments=a.UpdateCampaignSequenceArgs,
        build=lambda args: RemoteRequest(
            "PATCH",
            f"/campaigns/{args.campaign_id}/sequence/{args.sequence_id}",
            "update campaign sequence",
            body=args.payload("campaign_id", "sequence_id"),
        ),
    ),
    ToolSpec(
        name="smartlead_delete_campaign_sequence",
        description="Delete a specific email from a campaign sequence.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "sequence_id": _int("ID of the sequence email to delete"),
            },
            ["campaign_id", "sequence_id"],
        ),
        arguments=a.SequenceRef,
        build=lambda args: RemoteRequest(
            "DELETE",
            f"/campaigns/{args.campaign_id}/sequence/{args.sequence_id}",
            "delete campaign sequence",
        ),
    ),
    # Email accounts
    ToolSpec(
        name="smartlead_add_email_account_to_campaign",
        description="Add an email account to a campaign.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "email_account_id": _int("ID of the email account to add"),
            },
            ["campaign_id", "email_account_id"],
        ),
        arguments=a.EmailAccountRef,
        build=lambda args: RemoteRequest(
            "POST",
            f"/campaigns/{args.campaign_id}/email-accounts",
            "add email account to campaign",
            body={"email_account_id": args.email_account_id},
        ),
    ),
    ToolSpec(
        name="smartlead_update_email_account_in_campaign",
        description="Update an email account in a campaign.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "email_account_id": _int("ID of the email account to update"),
                "settings": _obj("Settings for the email account in this campaign"),
            },
            ["campaign_id", "email_account_id"],
        ),
        arguments=a.UpdateEmailAccountArgs,
        build=lambda args: RemoteRequest(
            "PATCH",
            f"/campaigns/{args.campaign_id}/email-accounts/{args.email_account_id}",
            "update email account in campaign",
            body=args.settings or {},
        ),
    ),
    ToolSpec(
        name="smartlead_delete_email_account_from_campaign",
        description="Remove an email account from a campaign.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "email_account_id": _int("ID of the email account to remove"),
            },
            ["campaign_id", "email_account_id"],
        ),
        arguments=a.EmailAccountRef,
        build=lambda args: RemoteRequest(
            "DELETE",
            f"/campaigns/{args.campaign_id}/email-accounts/{args.email_account_id}",
            "delete email account from campaign",
        ),
    ),
    # Leads
    ToolSpec(
        name="smartlead_add_lead_to_campaign",
        description="Add a lead to a campaign.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "lead": {**_LEAD_SCHEMA, "description": "Lead information"},
            },
            ["campaign_id", "lead"],
        ),
        arguments=a.AddLeadArgs,
        build=lambda args: RemoteRequest(
            "POST",
            f"/campaigns/{args.campaign_id}/leads",
            "add lead to campaign",
            body={"leads": [args.payload()["lead"]]},
        ),
    ),
    ToolSpec(
        name="smartlead_add_leads_to_campaign",
        description="Add up to 100 leads to a campaign in one request.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "leads": {
                    "type": "array",
                    "items": _LEAD_SCHEMA,
                    "minItems": 1,
                    "maxItems": a.MAX_BULK_LEADS,
                    "description": "Leads to add (1-100)",
                },
                "settings": _obj("Upload settings, e.g. duplicate handling"),
            },
            ["campaign_id", "leads"],
        ),
        arguments=a.AddLeadsArgs,
        build=lambda args: RemoteRequest(
            "POST",
            f"/campaigns/{args.campaign_id}/leads",
            "add leads to campaign",
            body=args.payload("campaign_id"),
        ),
    ),
    ToolSpec(
        name="smartlead_update_lead_in_campaign",
        description="Update a lead in a campaign.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "lead_id": _int("ID of the lead to update"),
                "lead": {
                    "type": "object",
                    "properties": _LEAD_PROPERTIES,
                    "description": "Updated lead information",
                },
            },
            ["campaign_id", "lead_id", "lead"],
        ),
        arguments=a.UpdateLeadArgs,
        build=lambda args: RemoteRequest(
            "PATCH",
            f"/campaigns/{args.campaign_id}/leads/{args.lead_id}",
            "update lead in campaign",
            body=args.payload()["lead"],
        ),
    ),
    ToolSpec(
        name="smartlead_delete_lead_from_campaign",
        description="Remove a lead from a campaign.",
        input_schema=_schema(
            {
                "campaign_id": _int("ID of the campaign"),
                "lead_id": _int("ID of the lead to remove"),
            },
            ["campaign_id", "lead_id"],
        ),
        arguments=a.LeadRef,
        build=lambda args: RemoteRequest(
            "DELETE",
            f"/campaigns/{args.campaign_id}/leads/{args.lead_id}",
            "delete lead from campaign",
        ),
    ),
)

_BY_NAME: dict[str, ToolSpec] = {spec.name: spec for spec in _CATALOG}


def list_tools() -> list[ToolSpec]:
    """Return every tool in catalog order."""
    return list(_CATALOG)


def get_tool(name: str) -> ToolSpec | None:
    """Look up a tool by name."""
    return _BY_NAME.get(name)
