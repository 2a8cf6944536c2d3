from app.application.use_cases.templates.validators import validate_field
from app.domain.entities import (
    CheckboxField,
    DropdownField,
    FileField,
    LengthConstraints,
    NumberField,
    RangeConstraints,
    TemplateField,
    TextareaField,
    TextField,
    template_field_from_payload,
)


def test_valid_text_field_has_no_errors():
    result = validate_field(TextField(id="f1", label="Full name", required=True))

    assert result.is_valid
    assert result.errors == ()


def test_blank_label_is_rejected():
    result = validate_field(CheckboxField(id="f1", label="   "))

    assert not result.is_valid
    assert result.errors == ("Field label is required",)


def test_missing_and_unknown_types_fail_closed():
    missing = validate_field(TemplateField(id="f1", label="Anything"))
    unknown = validate_field(
        template_field_from_payload({"id": "f2", "label": "Signature", "type": "signature"})
    )

    assert missing.errors == ("Field type is required",)
    assert unknown.errors == ("Unsupported field type 'signature'",)


def test_every_violated_rule_is_reported():
    field = DropdownField(id="f1", label="", options=("Yes", " ", "yes"))

    result = validate_field(field)

    assert result.errors == (
        "Field label is required",
        "Dropdown options cannot be empty",
        "Dropdown options must be unique",
    )


def test_dropdown_requires_options():
    result = validate_field(DropdownField(id="f1", label="Choice"))

    assert result.errors == ("Dropdown fields must have at least one option",)


def test_file_limits():
    invalid = FileField(id="f1", label="Receipt", max_files=0, max_file_size=1023)
    valid = FileField(id="f2", label="Receipt", max_files=1, max_file_size=1024)

    assert validate_field(invalid).errors == (
        "Maximum files must be at least 1",
        "Maximum file size must be at least 1KB",
    )
    assert validate_field(valid).is_valid


def test_number_range_must_be_strictly_increasing():
    equal = NumberField(id="f1", label="Amount", validation=RangeConstraints(min=5, max=5))
    open_ended = NumberField(id="f2", label="Amount", validation=RangeConstraints(min=5))

    assert validate_field(equal).errors == ("max must exceed min",)
    assert validate_field(open_ended).is_valid


def test_text_length_limits_must_be_strictly_increasing():
    text = TextField(
        id="f1", label="Code", validation=LengthConstraints(min_length=10, max_length=3)
    )
    textarea = TextareaField(
        id="f2", label="Notes", validation=LengthConstraints(min_length=1, max_length=300)
    )

    assert validate_field(text).errors == ("maxLength must exceed minLength",)
    assert validate_field(textarea).is_valid


def test_presentation_attributes_do_not_affect_validation():
    field = TextField(
        id="f1",
        label="Email",
        placeholder="name@example.com",
        help_text="Work address",
        validation=LengthConstraints(pattern=r".+@.+", custom_message="Invalid email"),
    )

    assert validate_field(field).is_valid


def test_column_span_must_be_between_one_and_three():
    wide = TextField(id="f1", label="Name", column_span=9)
    narrow = TextField(id="f2", label="Name", column_span=0)
    full = TextareaField(id="f3", label="Notes", column_span=3)

    assert validate_field(wide).errors == ("Column span must be 1, 2 or 3",)
    assert validate_field(narrow).errors == ("Column span must be 1, 2 or 3",)
    assert validate_field(full).is_valid


def test_blank_id_is_rejected():
    result = validate_field(TextField(id=" ", label="Name"))

    assert result.errors == ("Field id is required",)
