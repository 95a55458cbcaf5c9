import pytest

from perks_api.core.exceptions import ErrorKind, ValidationError
from perks_api.models.perk import PerkCategory
from perks_api.schemas.perk import (
    format_validation_errors,
    validate_perk_create,
    validate_perk_update,
)


def test_create_applies_defaults():
    data = validate_perk_create({"title": "Free Coffee", "merchant": "Acme"})
    assert data.title == "Free Coffee"
    assert data.category is PerkCategory.OTHER
    assert data.discount_percent == 0
    assert data.merchant == "Acme"
    assert data.description is None


def test_create_columns_use_model_names():
    data = validate_perk_create({"title": "Gym Pass", "discountPercent": 15, "category": "fitness"})
    columns = data.to_columns()
    assert columns["discount_percent"] == 15
    assert columns["category"] is PerkCategory.FITNESS
    assert "discountPercent" not in columns


def test_create_allows_empty_description_and_merchant():
    data = validate_perk_create({"title": "Lounge", "description": "", "merchant": ""})
    assert data.description == ""
    assert data.merchant == ""


@pytest.mark.parametrize("payload", [
    {},
    {"title": "A"},
    {"title": 42},
    {"description": "no title"},
])
def test_create_requires_valid_title(payload):
    with pytest.raises(ValidationError) as exc_info:
        validate_perk_create(payload)
    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert exc_info.value.status_code == 400
    assert "title" in exc_info.value.message


@pytest.mark.parametrize("discount", [-1, 100.5, 250, True])
def test_create_rejects_discount_out_of_range(discount):
    with pytest.raises(ValidationError) as exc_info:
        validate_perk_create({"title": "Deal", "discountPercent": discount})
    assert "discountPercent" in exc_info.value.message


@pytest.mark.parametrize("discount", [0, 50, 99.9, 100])
def test_create_accepts_discount_bounds(discount):
    data = validate_perk_create({"title": "Deal", "discountPercent": discount})
    assert 0 <= data.discount_percent <= 100


def test_create_rejects_unknown_category():
    with pytest.raises(ValidationError) as exc_info:
        validate_perk_create({"title": "Deal", "category": "books"})
    assert exc_info.value.message.startswith("category:")


def test_create_rejects_unknown_keys():
    with pytest.raises(ValidationError) as exc_info:
        validate_perk_create({"title": "Deal", "discount_percent": 10})
    assert "discount_percent" in exc_info.value.message


def test_create_rejects_null_merchant():
    with pytest.raises(ValidationError) as exc_info:
        validate_perk_create({"title": "Deal", "merchant": None})
    assert "merchant" in exc_info.value.message


@pytest.mark.parametrize("payload", [None, [], "title"])
def test_create_rejects_non_object_payload(payload):
    with pytest.raises(ValidationError):
        validate_perk_create(payload)


def test_update_keeps_only_submitted_fields():
    changes = validate_perk_update({"discountPercent": 25})
    assert changes.to_columns() == {"discount_percent": 25}


def test_update_does_not_apply_defaults():
    changes = validate_perk_update({"title": "Renamed"})
    columns = changes.to_columns()
    assert "category" not in columns
    assert "discount_percent" not in columns


def test_update_requires_at_least_one_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_perk_update({})
    assert exc_info.value.message == "value: at least one field must be provided"


@pytest.mark.parametrize("payload", [
    {"title": "A"},
    {"category": "books"},
    {"discountPercent": 101},
    {"discountPercent": True},
    {"unknown": True},
    {"title": None},
])
def test_update_rejects_invalid_fields(payload):
    with pytest.raises(ValidationError):
        validate_perk_update(payload)


def test_format_validation_errors_strips_request_location():
    errors = [
        {"loc": ("body", "title"), "msg": "Field required"},
        {"loc": ("query", "title"), "msg": "Value error, bad title"},
    ]
    assert format_validation_errors(errors) == "title: Field required; title: bad title"


def test_format_validation_errors_without_location():
    assert format_validation_errors([{"loc": (), "msg": "Invalid JSON"}]) == "value: Invalid JSON"


def test_create_has_no_upper_length_limit():
    data = validate_perk_create({"title": "T" * 1000, "merchant": "M" * 1000})
    assert len(data.title) == 1000
    assert len(data.merchant) == 1000


def test_update_has_no_upper_length_limit():
    changes = validate_perk_update({"title": "T" * 1000})
    assert changes.to_columns() == {"title": "T" * 1000}
