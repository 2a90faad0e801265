from decimal import Decimal

import pytest
from pydantic import ValidationError

from drawledger.models.draw_request import DrawRequest, DrawRequestCreate
from drawledger.models.project import Project, ProjectCreate


def test_project_form_defaults():
    form = ProjectCreate(name="Harbor Bridge")

    assert form.status == "Not Started"
    assert form.total_budget is None


def test_project_form_blank_budget_is_absent():
    form = ProjectCreate.model_validate({"name": "Depot", "total_budget": "  "})

    assert form.total_budget is None


def test_project_form_parses_budget_string():
    form = ProjectCreate.model_validate({"name": "Depot", "total_budget": "2500.75"})

    assert form.total_budget == Decimal("2500.75")


@pytest.mark.parametrize(
    "payload",
    [
        {"name": ""},
        {"name": "Depot", "total_budget": "-1"},
        {"name": "Depot", "status": "active"},
        {"name": "Depot", "status": "Cancelled"},
        {"total_budget": "10"},
    ],
)
def test_project_form_rejects_invalid_input(payload):
    with pytest.raises(ValidationError):
        ProjectCreate.model_validate(payload)


def test_draw_form_blank_fields_are_absent():
    form = DrawRequestCreate.model_validate(
        {"project_id": "p1", "description": "", "amount": ""}
    )

    assert form.description is None
    assert form.amount is None


@pytest.mark.parametrize(
    "payload",
    [
        {"project_id": "", "amount": "10"},
        {"project_id": "p1", "amount": "-0.01"},
        {"amount": "10"},
    ],
)
def test_draw_form_rejects_invalid_input(payload):
    with pytest.raises(ValidationError):
        DrawRequestCreate.model_validate(payload)


def test_rows_accept_either_id_key():
    assert Project.model_validate({"_id": "p1"}).id == "p1"
    assert Project.model_validate({"id": "p2"}).id == "p2"
    assert DrawRequest.model_validate({"_id": "d1", "project_id": "p1"}).id == "d1"


def test_stored_project_without_status_is_not_started():
    assert Project.model_validate({"id": "p1", "status": None}).status == "Not Started"


def test_stored_draw_without_status_is_pending():
    draw = DrawRequest.model_validate({"id": "d1", "project_id": "p1", "status": None})

    assert draw.status == "Pending"


def test_display_name_fallbacks():
    assert Project(id="p1").display_name == "Unnamed Project"
    assert Project(id="p1", name="Tower").display_name == "Tower"
    assert DrawRequest(id="d1", project_id="p1").model_dump(mode="json")["project_name"] == "Unknown Project"


def test_serialised_row_uses_plain_id_key():
    data = Project(id="p1", name="Tower").model_dump(mode="json")

    assert data["id"] == "p1"
    assert "_id" not in data
