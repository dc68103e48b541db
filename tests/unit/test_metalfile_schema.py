"""Unit tests for Metalfile schema validation and serialization."""

import copy

import pytest
import yaml

from metalfile_mcp.metalfile import (
    ROOT_FIELD_PATH,
    Metalfile,
    MetalfileValidationError,
    ValidationFailure,
    dump_metalfile_yaml,
    format_validation_failures,
    load_metalfile_yaml,
    metalfile_json_schema,
    parse_metalfile,
    validate_metalfile_data,
)


def _failure_paths(result) -> list[str]:
    return [failure.field_path for failure in result.errors]


def test_minimal_metalfile_is_valid(minimal_metalfile_data):
    result = validate_metalfile_data(minimal_metalfile_data)

    assert result.is_valid
    assert result.errors == []
    assert isinstance(result.metalfile, Metalfile)
    assert result.metalfile.package.name == "app"
    assert result.metalfile.files[0].dest == "/b"


def test_depends_defaults_to_empty_list(minimal_metalfile_data):
    metalfile = parse_metalfile(minimal_metalfile_data)

    assert metalfile.package.depends == []
    assert metalfile.to_document()["package"]["depends"] == []


def test_validation_does_not_mutate_input(minimal_metalfile_data):
    minimal_metalfile_data["package"]["maintainer"] = {"name": "someone"}
    original = copy.deepcopy(minimal_metalfile_data)

    metalfile = parse_metalfile(minimal_metalfile_data)
    document = metalfile.to_document()
    document["package"]["maintainer"]["name"] = "changed"

    assert minimal_metalfile_data == original
    assert "depends" not in minimal_metalfile_data["package"]


def test_sample_metalfile_is_valid(resources_path):
    data = load_metalfile_yaml((resources_path / "sample_metalfile.yml").read_text())

    metalfile = parse_metalfile(data)

    assert metalfile.package.version == "1.2.3"
    assert metalfile.package.depends == ["nodejs", "libssl3"]
    assert len(metalfile.files) == 3
    assert metalfile.conffiles == ["/etc/example-app/config.json"]
    assert metalfile.postinst.startswith("#!/bin/bash\n")


@pytest.mark.parametrize(
    "files_value",
    [
        pytest.param(None, id="missing"),
        pytest.param([], id="empty"),
        pytest.param("a -> /b", id="not-a-list"),
    ],
)
def test_files_must_be_a_non_empty_list(minimal_metalfile_data, files_value):
    if files_value is None:
        del minimal_metalfile_data["files"]
    else:
        minimal_metalfile_data["files"] = files_value

    result = validate_metalfile_data(minimal_metalfile_data)

    assert not result.is_valid
    assert result.metalfile is None
    assert "files" in _failure_paths(result)


@pytest.mark.parametrize("field", ["name", "version", "architecture", "description"])
def test_required_package_fields_must_be_non_empty(minimal_metalfile_data, field):
    minimal_metalfile_data["package"][field] = ""

    result = validate_metalfile_data(minimal_metalfile_data)

    assert not result.is_valid
    assert _failure_paths(result) == [f"package.{field}"]


@pytest.mark.parametrize("field", ["name", "version", "architecture", "description"])
def test_required_package_fields_must_be_present(minimal_metalfile_data, field):
    del minimal_metalfile_data["package"][field]

    result = validate_metalfile_data(minimal_metalfile_data)

    assert _failure_paths(result) == [f"package.{field}"]
    assert result.errors[0].message == "Field required"


def test_whitespace_is_not_trimmed(minimal_metalfile_data):
    minimal_metalfile_data["package"]["name"] = " "

    assert validate_metalfile_data(minimal_metalfile_data).is_valid


def test_numbers_are_not_coerced_to_strings(minimal_metalfile_data):
    minimal_metalfile_data["package"]["version"] = 1.0

    result = validate_metalfile_data(minimal_metalfile_data)

    assert _failure_paths(result) == ["package.version"]


def test_missing_package_is_reported(minimal_metalfile_data):
    del minimal_metalfile_data["package"]

    result = validate_metalfile_data(minimal_metalfile_data)

    assert _failure_paths(result) == ["package"]


@pytest.mark.parametrize(
    "mutate,expected_path",
    [
        (lambda d: d["package"].update(depends=["ok", ""]), "package.depends.1"),
        (lambda d: d["package"].update(depends="nodejs"), "package.depends"),
        (lambda d: d["files"].append({"src": "x"}), "files.1.dest"),
        (lambda d: d["files"][0].update(src=""), "files.0.src"),
        (lambda d: d.update(conffiles=[""]), "conffiles.0"),
        (lambda d: d.update(conffiles="/etc/app.conf"), "conffiles"),
        (lambda d: d.update(postinst=["echo hi"]), "postinst"),
    ],
)
def test_nested_failures_report_dotted_paths(minimal_metalfile_data, mutate, expected_path):
    mutate(minimal_metalfile_data)

    result = validate_metalfile_data(minimal_metalfile_data)

    assert _failure_paths(result) == [expected_path]


def test_empty_postinst_is_allowed(minimal_metalfile_data):
    minimal_metalfile_data["postinst"] = ""

    metalfile = parse_metalfile(minimal_metalfile_data)

    assert metalfile.postinst == ""
    assert metalfile.to_document()["postinst"] == ""


@pytest.mark.parametrize("value", [None, "just text", 42, ["package"]])
def test_non_mapping_input_fails_at_root(value):
    result = validate_metalfile_data(value)

    assert not result.is_valid
    assert _failure_paths(result) == [ROOT_FIELD_PATH]


def test_all_failures_are_collected(resources_path):
    data = load_metalfile_yaml((resources_path / "invalid_metalfile.yml").read_text())

    result = validate_metalfile_data(data)

    assert _failure_paths(result) == [
        "package.name",
        "package.version",
        "package.description",
        "files",
        "conffiles.0",
    ]


def test_parse_metalfile_raises_with_failures(minimal_metalfile_data):
    minimal_metalfile_data["files"] = []

    with pytest.raises(MetalfileValidationError) as exc_info:
        parse_metalfile(minimal_metalfile_data)

    assert isinstance(exc_info.value, ValueError)
    assert [f.field_path for f in exc_info.value.failures] == ["files"]
    assert str(exc_info.value).startswith("Invalid Metalfile:\n- files: ")


def test_format_validation_failures():
    failures = [
        ValidationFailure(field_path="package.name", message="String should have at least 1 character"),
        ValidationFailure(field_path=ROOT_FIELD_PATH, message="Input should be a valid dictionary"),
    ]

    assert format_validation_failures(failures) == (
        "- package.name: String should have at least 1 character\n"
        "- (root): Input should be a valid dictionary"
    )


def test_unknown_fields_are_preserved_after_known_fields():
    data = {
        "x-build": {"strip": True},
        "package": {
            "maintainer": "team",
            "name": "app",
            "version": "1.0.0",
            "architecture": "all",
            "description": "d",
        },
        "files": [{"mode": "0755", "src": "a", "dest": "/b"}],
    }

    document = parse_metalfile(data).to_document()

    assert list(document) == ["package", "files", "x-build"]
    assert list(document["package"]) == [
        "name",
        "version",
        "architecture",
        "depends",
        "description",
        "maintainer",
    ]
    assert document["files"] == [{"src": "a", "dest": "/b", "mode": "0755"}]
    assert document["x-build"] == {"strip": True}


def test_optional_fields_are_omitted_when_absent(minimal_metalfile_data):
    document = parse_metalfile(minimal_metalfile_data).to_document()

    assert "conffiles" not in document
    assert "postinst" not in document


def test_round_trip_through_yaml(resources_path):
    data = load_metalfile_yaml((resources_path / "sample_metalfile.yml").read_text())
    metalfile = parse_metalfile(data)

    reloaded = parse_metalfile(load_metalfile_yaml(dump_metalfile_yaml(metalfile)))

    assert reloaded.to_document() == metalfile.to_document()
    assert reloaded.to_document() == data


def test_round_trip_materializes_depends(minimal_metalfile_data):
    yaml_text = dump_metalfile_yaml(parse_metalfile(minimal_metalfile_data))

    reloaded = load_metalfile_yaml(yaml_text)

    assert "depends: []" in yaml_text
    assert reloaded["package"]["depends"] == []
    assert {k: v for k, v in reloaded["package"].items() if k != "depends"} == (
        minimal_metalfile_data["package"]
    )


def test_dump_does_not_wrap_long_lines(minimal_metalfile_data):
    long_description = " ".join(["word"] * 100)
    minimal_metalfile_data["package"]["description"] = long_description

    yaml_text = dump_metalfile_yaml(parse_metalfile(minimal_metalfile_data))

    assert f"description: {long_description}\n" in yaml_text


def test_dump_writes_multiline_postinst_as_literal_block(minimal_metalfile_data):
    minimal_metalfile_data["postinst"] = '#!/bin/bash\necho "postinst hook"\n'

    yaml_text = dump_metalfile_yaml(parse_metalfile(minimal_metalfile_data))

    assert 'postinst: |\n  #!/bin/bash\n  echo "postinst hook"\n' in yaml_text
    assert yaml.safe_load(yaml_text)["postinst"] == minimal_metalfile_data["postinst"]


def test_dump_is_deterministic(resources_path):
    data = load_metalfile_yaml((resources_path / "sample_metalfile.yml").read_text())

    first = dump_metalfile_yaml(parse_metalfile(data))
    second = dump_metalfile_yaml(parse_metalfile(copy.deepcopy(data)))

    assert first == second


def test_load_metalfile_yaml_raises_on_syntax_error():
    with pytest.raises(yaml.YAMLError):
        load_metalfile_yaml("not: [valid")


@pytest.mark.parametrize("scalar", ["yes", "no", "on", "off", "y", "n", "2024-01-01"])
def test_load_keeps_yaml_11_scalars_as_strings(scalar):
    assert load_metalfile_yaml(f"value: {scalar}") == {"value": scalar}


@pytest.mark.parametrize("scalar,expected", [("true", True), ("False", False), ("TRUE", True)])
def test_load_reads_true_and_false_as_booleans(scalar, expected):
    assert load_metalfile_yaml(f"value: {scalar}") == {"value": expected}


def test_load_converts_keys_to_strings():
    data = load_metalfile_yaml("1: a\ntrue: b\n~: c\n1.5: d\nnested: {2: e}\n")

    assert data == {"1": "a", "true": "b", "null": "c", "1.5": "d", "nested": {"2": "e"}}


def test_yaml_11_scalars_survive_round_trip(minimal_metalfile_data):
    minimal_metalfile_data["package"]["name"] = "yes"
    minimal_metalfile_data["package"]["version"] = "2024-01-01"
    minimal_metalfile_data["1"] = "numeric key"

    yaml_text = dump_metalfile_yaml(parse_metalfile(minimal_metalfile_data))
    reloaded = load_metalfile_yaml(yaml_text)

    assert reloaded["package"]["name"] == "yes"
    assert reloaded["package"]["version"] == "2024-01-01"
    assert reloaded["1"] == "numeric key"


def test_json_schema_describes_required_fields():
    schema = metalfile_json_schema()

    assert set(schema["required"]) == {"package", "files"}
    assert "conffiles" in schema["properties"]
    package_schema = schema["$defs"]["MetalfilePackage"]
    assert set(package_schema["required"]) == {"name", "version", "architecture", "description"}
