import pytest

from core.models import Tag, TagSet


def test_from_dict_coerces_values_to_str():
    ts = TagSet.from_dict({"Port": 8080, "Enabled": True})
    assert ts.to_dict() == {"Port": "8080", "Enabled": "True"}


def test_from_aws_drops_exact_duplicates_only():
    ts = TagSet.from_aws(
        [
            {"Key": "A", "Value": "1"},
            {"Key": "A", "Value": "1"},
            {"Key": "A", "Value": "2"},
        ]
    )
    assert ts.tags == [Tag("A", "1"), Tag("A", "2")]


def test_to_aws_is_sorted_by_key_then_value():
    ts = TagSet([Tag("b", "1"), Tag("a", "2"), Tag("a", "1")])
    assert ts.to_aws() == [
        {"Key": "a", "Value": "1"},
        {"Key": "a", "Value": "2"},
        {"Key": "b", "Value": "1"},
    ]


@pytest.mark.parametrize("raw", [None, {}, []])
def test_from_any_empty_inputs(raw):
    assert len(TagSet.from_any(raw)) == 0


def test_from_any_accepts_dict_list_and_tagset():
    expected = {"Owner": "team"}
    assert TagSet.from_any({"Owner": "team"}).to_dict() == expected
    assert TagSet.from_any([{"Key": "Owner", "Value": "team"}]).to_dict() == expected

    ts = TagSet.from_dict(expected)
    assert TagSet.from_any(ts) is ts


def test_from_any_rejects_unknown_format():
    with pytest.raises(TypeError):
        TagSet.from_any("Owner=team")


def test_keys():
    assert TagSet.from_dict({"A": "1", "B": "2"}).keys() == {"A", "B"}


def test_non_string_keys_are_coerced():
    ts = TagSet.from_dict({2024: "legacy", True: "x", "Owner": "a"})
    assert ts.to_dict() == {"2024": "legacy", "True": "x", "Owner": "a"}
    # ordenação não quebra com keys que vieram como int/bool
    assert [t["Key"] for t in ts.to_aws()] == ["2024", "Owner", "True"]

    assert TagSet.from_aws([{"Key": 7, "Value": 1}]).tags == [Tag("7", "1")]


def test_null_values_become_empty_string():
    assert TagSet.from_dict({"Owner": None}).to_dict() == {"Owner": ""}
    assert TagSet.from_aws([{"Key": "Owner", "Value": None}]).to_dict() == {"Owner": ""}
    assert TagSet.from_aws([{"Key": "Owner"}]).to_dict() == {"Owner": ""}
