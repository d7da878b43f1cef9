"""Argument models for every Smartlead tool.

Each tool owns one model. Fields are strict, so a string is never
coerced into an id and booleans are not accepted as numbers. Unknown keys
are kept and forwarded to the API untouched.

Validation is shape-only: nothing here talks to the remote service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from smartlead_mcp.core.errors import InvalidParamsError
from smartlead_mcp.core.result import Err, Ok

if TYPE_CHECKING:
    from smartlead_mcp.core.result import Outcome

MAX_BULK_LEADS = 100

Number = StrictInt | StrictFloat


class ToolArguments(BaseModel):
    """Base configuration shared by all argument models."""

    model_config = ConfigDict(extra="allow")

    def payload(self, *exclude: str) -> dict[str, Any]:
        """Provided fields, minus *exclude*, ready to send as JSON."""
        return self.model_dump(exclude_unset=True, exclude=set(exclude))


# ─── Campaigns ────────────────────────────────────────────────


class CampaignRef(ToolArguments):
    campaign_id: StrictInt


class CreateCampaignArgs(ToolArguments):
    name: StrictStr
    client_id: StrictInt | None = None


class UpdateCampaignScheduleArgs(CampaignRef):
    timezone: StrictStr | None = None
    days_of_the_week: list[StrictInt] | None = None
    start_hour: StrictStr | None = None
    end_hour: StrictStr | None = None
    min_time_btw_emails: Number | None = None
    max_new_leads_per_day: StrictInt | None = None
    schedule_start_time: StrictStr | None = None


class UpdateCampaignSettingsArgs(CampaignRef):
    name: StrictStr | None = None
    status: Literal["active", "paused", "completed"] | None = None
    settings: dict[str, Any] | None = None


class ListCampaignsArgs(ToolArguments):
    status: Literal["active", "paused", "completed", "all"] | None = None
    limit: StrictInt | None = Field(default=None, ge=1)
    offset: StrictInt | None = Field(default=None, ge=0)


# ─── Sequences ────────────────────────────────────────────────


class SequenceStep(ToolArguments):
    subject: StrictStr
    body: StrictStr
    wait_days: Number | None = None


class SaveCampaignSequenceArgs(CampaignRef):
    sequence: list[SequenceStep]


class SequenceRef(CampaignRef):
    sequence_id: StrictInt


class UpdateCampaignSequenceArgs(SequenceRef):
    subject: StrictStr | None = None
    body: StrictStr | None = None
    wait_days: Number | None = None


# ─── Email accounts ───────────────────────────────────────────


class EmailAccountRef(CampaignRef):
    email_account_id: StrictInt


class UpdateEmailAccountArgs(EmailAccountRef):
    settings: dict[str, Any] | None = None


# ─── Leads ────────────────────────────────────────────────────


class LeadFields(ToolArguments):
    email: StrictStr | None = None
    first_name: StrictStr | None = None
    last_name: StrictStr | None = None
    company: StrictStr | None = None
    custom_variables: dict[str, Any] | None = None


class Lead(LeadFields):
    email: StrictStr


class AddLeadArgs(CampaignRef):
    lead: Lead


class AddLeadsArgs(CampaignRef):
    leads: list[Lead] = Field(min_length=1, max_length=MAX_BULK_LEADS)
    settings: dict[str, Any] | None = None


class LeadRef(CampaignRef):
    lead_id: StrictInt


class UpdateLeadArgs(LeadRef):
    lead: LeadFields


# ─── Validation ───────────────────────────────────────────────


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "arguments"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


def validate_arguments(
    tool: str,
    model: type[ToolArguments],
    arguments: Any,
) -> Outcome[ToolArguments]:
    """Narrow an untyped argument bag to *model*.

    Returns ``Ok(instance)`` or ``Err(InvalidParamsError)``. A missing
    argument bag is always rejected.
    """
    if arguments is None:
        return Err(InvalidParamsError(tool, "No arguments provided"))
    try:
        return Ok(model.model_validate(arguments))
    except ValidationError as e:
        return Err(
            InvalidParamsError(tool, f"Invalid arguments for {tool}: {_summarize(e)}")
        )
