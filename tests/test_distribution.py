from __future__ import annotations

import pytest

from example_package import distribution
from example_package.distribution import SDIST, WHEEL


def test_name_forms():
    assert distribution.normalize_name("Example_Package.Foo") == "example-package-foo"
    assert distribution.normalize_name("a--b__c") == "a-b-c"
    assert distribution.filename_name("example-package-Foo") == "example_package_foo"
    assert distribution.import_name("example_package_a-b.c") == "example_package_a_b_c"


def test_expected_artifacts_for_a_build():
    sdist, wheel = distribution.expected_artifacts("example_package_Alice", "0.0.1")
    assert sdist.filename == "example_package_alice-0.0.1.tar.gz"
    assert sdist.kind == SDIST
    assert wheel.filename == "example_package_alice-0.0.1-py3-none-any.whl"
    assert wheel.kind == WHEEL
    assert wheel.tags == "py3-none-any"


def test_expected_artifacts_custom_tags():
    _, wheel = distribution.expected_artifacts("pkg", "1.2", tags="cp312-cp312-manylinux_2_17_x86_64")
    assert wheel.filename == "pkg-1.2-cp312-cp312-manylinux_2_17_x86_64.whl"


def test_parse_wheel_filename():
    artifact = distribution.parse_artifact_filename("example_package_alice-0.0.1-py3-none-any.whl")
    assert artifact.kind == WHEEL
    assert artifact.name == "example_package_alice"
    assert artifact.version == "0.0.1"
    assert artifact.tags == "py3-none-any"


def test_parse_wheel_filename_with_build_tag():
    artifact = distribution.parse_artifact_filename("pkg-1.0-1-py3-none-any.whl")
    assert artifact.version == "1.0"
    assert artifact.tags == "py3-none-any"


def test_parse_sdist_filename():
    artifact = distribution.parse_artifact_filename("example_package_alice-0.0.1.tar.gz")
    assert artifact.kind == SDIST
    assert artifact.name == "example_package_alice"
    assert artifact.version == "0.0.1"
    assert artifact.tags == ""


@pytest.mark.parametrize("filename", ["pkg-1.0.zip", "pkg-1.0.whl", "pkg.tar.gz", "README.md"])
def test_parse_rejects_unknown_files(filename):
    with pytest.raises(ValueError):
        distribution.parse_artifact_filename(filename)


def test_find_artifacts_missing_dir(tmp_path):
    assert distribution.find_artifacts(tmp_path / "dist") == []


def test_find_artifacts_ignores_other_files(tmp_path):
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "pkg-0.0.1.tar.gz").write_bytes(b"")
    (dist / "pkg-0.0.1-py3-none-any.whl").write_bytes(b"")
    (dist / "notes.txt").write_text("x")
    (dist / "nested.whl").mkdir()

    found = distribution.find_artifacts(dist)

    assert {a.kind for a in found} == {SDIST, WHEEL}
    assert [a.filename for a in found] == sorted(a.filename for a in found)


@pytest.mark.parametrize(
    "version, built",
    [("1.0.0-beta", "1.0.0b0"), ("01.2", "1.2"), ("1.0.0.RC1", "1.0.0rc1"), ("0.0.1", "0.0.1")],
)
def test_expected_artifacts_use_normalized_version(version, built):
    sdist, wheel = distribution.expected_artifacts("example_package_Bob", version)
    assert sdist.filename == f"example_package_bob-{built}.tar.gz"
    assert wheel.filename == f"example_package_bob-{built}-py3-none-any.whl"
    assert sdist.version == wheel.version == built


def test_expected_artifacts_reject_invalid_version():
    with pytest.raises(ValueError):
        distribution.expected_artifacts("pkg", "not a version")


def test_parsed_versions_are_comparable():
    sdist = distribution.parse_artifact_filename("example_package_bob-1.0.0b0.tar.gz")
    assert distribution.same_version(sdist.version, "1.0.0-beta")
    assert distribution.same_version("1.0", "1.0.0")
    assert not distribution.same_version(sdist.version, "1.0.0")
