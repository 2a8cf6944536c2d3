import pytest

from app.application.use_cases.templates import (
    NewReportTemplateData,
    clone_template,
    create_template,
    delete_template,
    get_template,
    list_templates,
    record_template_usage,
    update_template,
    update_template_department_access,
)
from app.domain.entities import DepartmentAccess, DropdownField, NumberField, TextField
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import ActivityLogRepository, TemplateRepository

WORKSPACE = "ws-1"


def _data(**overrides) -> NewReportTemplateData:
    values = {
        "name": "Site inspection",
        "fields": [
            TextField(id="f2", label="Inspector", order=1),
            DropdownField(id="f1", label="Result", order=0, options=("Pass", "Fail")),
        ],
        "description": "Monthly site inspection",
        "category": "Safety",
        "tags": ["safety", " safety ", ""],
        "settings": {"require_approval": True},
    }
    values.update(overrides)
    return NewReportTemplateData(**values)


def _create(session, **overrides):
    return create_template(
        session, workspace_id=WORKSPACE, data=_data(**overrides), created_by="owner-1"
    )


def _actions(session, template_id):
    entries = ActivityLogRepository(session).list(WORKSPACE, entity_id=str(template_id))
    return [entry.action for entry in entries]


def test_create_persists_version_one_with_defaults(session):
    template = _create(session)

    assert template.id is not None
    assert template.status == "active"
    assert template.version == 1
    assert template.change_log == []
    assert template.usage.total_reports == 0
    assert template.tags == ("safety",)
    assert [field.id for field in template.fields] == ["f1", "f2"]
    assert template.created_by == "owner-1"
    assert _actions(session, template.id) == ["template_created"]


def test_create_rejects_duplicate_labels_without_writing(session):
    fields = [TextField(id="a", label="Name"), TextField(id="b", label="name")]

    with pytest.raises(ValidationError) as exc_info:
        _create(session, fields=fields)

    assert exc_info.value.template_errors == {"fields": "field labels must be unique"}
    assert list(TemplateRepository(session).list(WORKSPACE)) == []


def test_create_reports_field_errors(session):
    fields = [NumberField(id="amount", label="Amount")]
    fields.append(DropdownField(id="kind", label="Kind"))

    with pytest.raises(ValidationError) as exc_info:
        _create(session, fields=fields)

    assert exc_info.value.field_errors == {
        "kind": ["Dropdown fields must have at least one option"]
    }


def test_create_rejects_duplicate_field_ids_without_writing(session):
    fields = [TextField(id="x", label="A"), TextField(id="x", label="B", order=1)]

    with pytest.raises(ValidationError) as exc_info:
        _create(session, fields=fields)

    assert exc_info.value.template_errors == {"fields": "field ids must be unique"}
    assert list(TemplateRepository(session).list(WORKSPACE)) == []


def test_create_rejects_values_outside_closed_sets(session):
    with pytest.raises(ValidationError) as exc_info:
        _create(
            session,
            fields=[TextField(id="f1", label="Name", column_span=9)],
            visibility="bogus",
            allowed_roles=("superuser",),
        )

    error = exc_info.value
    assert set(error.template_errors) == {"visibility", "allowed_roles"}
    assert error.field_errors == {"f1": ["Column span must be 1, 2 or 3"]}
    assert list(TemplateRepository(session).list(WORKSPACE)) == []


def test_drafts_may_start_without_fields_but_cannot_be_activated_empty(session):
    draft = _create(session, fields=[], status="draft")

    with pytest.raises(ValidationError) as exc_info:
        update_template(
            session,
            workspace_id=WORKSPACE,
            template_id=draft.id,
            updates={"status": "active"},
            updated_by="owner-1",
        )

    assert exc_info.value.template_errors == {"fields": "at least one field required"}


def test_description_update_keeps_version(session):
    template = _create(session)

    updated = update_template(
        session,
        workspace_id=WORKSPACE,
        template_id=template.id,
        updates={"description": "new text"},
        updated_by="admin-1",
    )

    assert updated.version == 1
    assert updated.change_log == []
    assert updated.description == "new text"
    assert updated.updated_by == "admin-1"


def test_field_update_bumps_version_and_appends_change_log(session):
    template = _create(session)

    updated = update_template(
        session,
        workspace_id=WORKSPACE,
        template_id=template.id,
        updates={"fields": [TextField(id="f9", label="Notes")]},
        updated_by="admin-1",
    )

    assert updated.version == 2
    assert len(updated.change_log) == 1
    entry = updated.change_log[0]
    assert entry.version == 2
    assert entry.changes == "Template fields updated"
    assert entry.changed_by == "admin-1"
    assert entry.changed_at is not None


def test_versions_only_move_on_structural_changes(session):
    template = _create(session)
    sequence = [
        ({"tags": ["ops"]}, 1),
        ({"name": "Site audit"}, 2),
        ({"name": "Site audit"}, 2),
        ({"settings": {"require_approval": False}}, 3),
        ({"category": "Operations"}, 3),
    ]

    for updates, expected_version in sequence:
        template = update_template(
            session,
            workspace_id=WORKSPACE,
            template_id=template.id,
            updates=updates,
            updated_by="admin-1",
        )
        assert template.version == expected_version

    assert [entry.version for entry in template.change_log] == [2, 3]
    assert template.change_log[0].changes == (
        "Template renamed from 'Site inspection' to 'Site audit'"
    )


def test_invalid_update_leaves_template_untouched(session):
    template = _create(session)

    with pytest.raises(ValidationError):
        update_template(
            session,
            workspace_id=WORKSPACE,
            template_id=template.id,
            updates={"fields": [TextField(id="x", label="A"), TextField(id="y", label="a")]},
            updated_by="admin-1",
        )

    stored = get_template(session, workspace_id=WORKSPACE, template_id=template.id)
    assert stored.version == 1
    assert [field.id for field in stored.fields] == ["f1", "f2"]


def test_update_rejects_unknown_visibility_and_roles(session):
    template = _create(session)

    with pytest.raises(ValidationError) as exc_info:
        update_template(
            session,
            workspace_id=WORKSPACE,
            template_id=template.id,
            updates={"visibility": "hidden", "allowed_roles": ["guest"]},
            updated_by="admin-1",
        )

    assert set(exc_info.value.template_errors) == {"visibility", "allowed_roles"}
    stored = get_template(session, workspace_id=WORKSPACE, template_id=template.id)
    assert stored.visibility == "public"
    assert stored.allowed_roles == ()


def test_update_rejects_immutable_and_unknown_attributes(session):
    template = _create(session)

    with pytest.raises(ValidationError) as exc_info:
        update_template(
            session,
            workspace_id=WORKSPACE,
            template_id=template.id,
            updates={"version": 9, "workspace_id": "ws-2", "colour": "red"},
            updated_by="admin-1",
        )

    assert set(exc_info.value.template_errors) == {"version", "workspace_id", "colour"}


def test_update_missing_template_is_not_found(session):
    with pytest.raises(NotFoundError):
        update_template(
            session,
            workspace_id=WORKSPACE,
            template_id=404,
            updates={"description": "x"},
            updated_by="admin-1",
        )


def test_templates_are_scoped_to_their_workspace(session):
    template = _create(session)

    with pytest.raises(NotFoundError):
        get_template(session, workspace_id="ws-2", template_id=template.id)
    assert list_templates(session, workspace_id="ws-2") == []


def test_delete_unused_template_removes_it(session):
    template = _create(session)

    result = delete_template(
        session, workspace_id=WORKSPACE, template_id=template.id, deleted_by="owner-1"
    )

    assert result is None
    with pytest.raises(NotFoundError):
        get_template(session, workspace_id=WORKSPACE, template_id=template.id)
    assert _actions(session, template.id) == ["template_created", "template_deleted"]


def test_delete_used_template_archives_it(session):
    template = _create(session)
    for fields in (
        [TextField(id="a", label="First")],
        [TextField(id="b", label="Second")],
    ):
        template = update_template(
            session,
            workspace_id=WORKSPACE,
            template_id=template.id,
            updates={"fields": fields},
            updated_by="admin-1",
        )
    for _ in range(5):
        record_template_usage(
            session, workspace_id=WORKSPACE, template_id=template.id, status="submitted"
        )
    assert template.version == 3

    archived = delete_template(
        session, workspace_id=WORKSPACE, template_id=template.id, deleted_by="owner-1"
    )

    assert archived.status == "archived"
    assert archived.version == 3
    stored = get_template(session, workspace_id=WORKSPACE, template_id=template.id)
    assert stored.status == "archived"
    assert stored.usage.total_reports == 5
    assert _actions(session, template.id) == [
        "template_created",
        "template_updated",
        "template_updated",
        "template_archived",
    ]


def test_clone_produces_fresh_draft(session):
    source = _create(session)
    source = update_template(
        session,
        workspace_id=WORKSPACE,
        template_id=source.id,
        updates={"name": "Site audit"},
        updated_by="admin-1",
    )
    record_template_usage(
        session, workspace_id=WORKSPACE, template_id=source.id, status="draft"
    )

    clone = clone_template(
        session,
        workspace_id=WORKSPACE,
        template_id=source.id,
        new_name="Site audit (copy)",
        cloned_by="admin-2",
    )

    assert clone.id != source.id
    assert clone.name == "Site audit (copy)"
    assert clone.status == "draft"
    assert clone.version == 1
    assert clone.change_log == []
    assert clone.usage.total_reports == 0
    assert clone.created_by == "admin-2"
    assert clone.fields == source.fields
    assert clone.settings == source.settings
    assert _actions(session, clone.id) == ["template_created", "template_cloned"]


def test_clone_of_missing_template_is_not_found(session):
    with pytest.raises(NotFoundError):
        clone_template(
            session,
            workspace_id=WORKSPACE,
            template_id=1,
            new_name="Copy",
            cloned_by="admin-1",
        )


def test_department_access_update_is_not_structural(session):
    template = _create(session)
    access = DepartmentAccess(type="multi_department", allowed_departments=("Finance",))

    updated = update_template_department_access(
        session,
        workspace_id=WORKSPACE,
        template_id=template.id,
        department_access=access,
        updated_by="admin-1",
    )

    assert updated.department_access == access
    assert updated.version == 1
    assert _actions(session, template.id)[-1] == "department_access_updated"


def test_department_access_type_is_validated(session):
    template = _create(session)

    with pytest.raises(ValidationError) as exc_info:
        update_template_department_access(
            session,
            workspace_id=WORKSPACE,
            template_id=template.id,
            department_access=DepartmentAccess(type="everyone"),
            updated_by="admin-1",
        )

    assert "department_access" in exc_info.value.template_errors


def test_activity_log_failures_do_not_fail_the_operation(session, monkeypatch, caplog):
    def _broken_create(self, entry):
        raise RuntimeError("activity store unavailable")

    monkeypatch.setattr(ActivityLogRepository, "create", _broken_create)

    template = _create(session)

    assert get_template(session, workspace_id=WORKSPACE, template_id=template.id).name == (
        "Site inspection"
    )
    assert "Failed to log template_created activity" in caplog.text
