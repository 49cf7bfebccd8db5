import pytest

from keydecoder.models import ExplicitKey, FieldSpec, KeyStrategy, Normalize
from keydecoder.resolve import MissingKey, convert_record_keys, resolve_fields, resolve_key

USER = {
    "user_id": "ABCD1528",
    "user_name": "Krishna",
    "user_email": "x@example.com",
}


def test_explicit_keys_used_verbatim():
    fields = [
        FieldSpec.explicit("id", "user_id"),
        FieldSpec.explicit("name", "user_name"),
        FieldSpec.explicit("email", "user_email"),
    ]
    assert resolve_fields(USER, fields) == {
        "id": "ABCD1528",
        "name": "Krishna",
        "email": "x@example.com",
    }


def test_normalized_lookup():
    record = {"first_name": "Krishna", "last_name": "Prakash"}
    fields = [FieldSpec(name="firstName"), FieldSpec(name="lastName")]
    assert resolve_fields(record, fields) == {"firstName": "Krishna", "lastName": "Prakash"}


def test_field_spec_defaults_to_normalize():
    assert FieldSpec(name="firstName").source == Normalize()


def test_leading_and_trailing_underscores_do_not_match():
    record = {"_first_name": "Krishna", "last_name_": "Prakash"}
    fields = [FieldSpec(name="firstName"), FieldSpec(name="lastName")]

    with pytest.raises(MissingKey) as exc:
        resolve_fields(record, fields)

    assert exc.value.field == "firstName"
    assert exc.value.searched_key == "firstName"
    assert exc.value.to_dict() == {
        "error": "missing_key",
        "field": "firstName",
        "searched_key": "firstName",
    }


def test_fails_fast_in_declared_order():
    record = {"first_name": "Krishna"}
    fields = [
        FieldSpec(name="firstName"),
        FieldSpec(name="middleName"),
        FieldSpec(name="lastName"),
    ]

    with pytest.raises(MissingKey) as exc:
        resolve_fields(record, fields)

    assert exc.value.field == "middleName"


def test_override_is_not_normalized():
    # "user_id" would normalize to "userId", but overrides are looked up as given
    fields = [FieldSpec.explicit("id", "userId")]

    with pytest.raises(MissingKey) as exc:
        resolve_fields(USER, fields)

    assert exc.value.field == "id"
    assert exc.value.searched_key == "userId"


def test_convert_strategy_matches_override_against_converted_keys():
    record = {
        "user_id": "ABCD1528",
        "first_name": "Krishna",
        "last_name": "Prakash",
        "user_email": "x@example.com",
    }
    fields = [
        FieldSpec.explicit("id", "userId"),
        FieldSpec(name="firstName"),
        FieldSpec.explicit("lastName", "lastName"),
        FieldSpec.explicit("email", "userEmail"),
    ]

    assert resolve_fields(record, fields, KeyStrategy.CONVERT_FROM_SNAKE_CASE) == {
        "id": "ABCD1528",
        "firstName": "Krishna",
        "lastName": "Prakash",
        "email": "x@example.com",
    }


def test_convert_strategy_hides_raw_keys_from_overrides():
    fields = [FieldSpec.explicit("id", "user_id")]

    with pytest.raises(MissingKey):
        resolve_fields(USER, fields, KeyStrategy.CONVERT_FROM_SNAKE_CASE)


def test_first_record_key_wins_on_collision():
    record = {"first_name": "a", "first__name": "b"}
    assert resolve_key(record, FieldSpec(name="firstName")) == "first_name"
    assert convert_record_keys(record) == {"firstName": "first_name"}


def test_missing_key_structured_data():
    err = MissingKey("firstName", "firstName")
    assert isinstance(err, KeyError)
    assert err.to_dict() == {
        "error": "missing_key",
        "field": "firstName",
        "searched_key": "firstName",
    }
    assert "firstName" in str(err)


def test_field_spec_parses_tagged_source():
    spec = FieldSpec.model_validate({"name": "id", "source": {"kind": "explicit", "key": "user_id"}})
    assert spec.source == ExplicitKey(key="user_id")
