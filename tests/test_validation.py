"""Tests for build-readiness checks of entry points."""

import pytest

from libpack.discovery import LibraryPackage
from libpack.entry_point import EntryPoint
from libpack.validation import EntryPointConfigError
from libpack.validation import check_entry_point
from libpack.validation import check_package


@pytest.fixture
def primary():
    return EntryPoint({"name": "@acme/widgets"}, {"dest": "dist", "lib": {"entryFile": "index.ts"}}, "/lib")


class TestCheckEntryPoint:
    def test_complete_primary(self, primary):
        assert check_entry_point(primary) is primary

    def test_complete_secondary(self, primary):
        secondary = EntryPoint({}, {"lib": {"entryFile": "index.ts"}}, "/lib/testing", primary)
        assert check_entry_point(secondary) is secondary

    def test_missing_entry_file(self, primary):
        secondary = EntryPoint({}, {}, "/lib/testing", primary)
        with pytest.raises(EntryPointConfigError, match="@acme/widgets/testing") as exc_info:
            check_entry_point(secondary)
        assert exc_info.value.option == "lib.entryFile"
        assert exc_info.value.entry_point is secondary

    def test_missing_name(self):
        entry_point = EntryPoint({}, {"dest": "dist", "lib": {"entryFile": "index.ts"}}, "/lib")
        with pytest.raises(EntryPointConfigError, match="no 'name'") as exc_info:
            check_entry_point(entry_point)
        assert exc_info.value.option == "name"

    def test_missing_dest(self):
        entry_point = EntryPoint({"name": "widgets"}, {"lib": {"entryFile": "index.ts"}}, "/lib")
        with pytest.raises(EntryPointConfigError) as exc_info:
            check_entry_point(entry_point)
        assert exc_info.value.option == "dest"

    def test_secondary_needs_no_name_or_dest(self, primary):
        secondary = EntryPoint({}, {"lib": {"entryFile": "index.ts"}}, "/lib/testing", primary)
        assert secondary.package_json == {}
        check_entry_point(secondary)

    def test_missing_optional_options_pass(self, primary):
        assert primary.umd_module_ids is None
        assert primary.css_url is None
        check_entry_point(primary)


def test_check_package_primary_first(primary):
    secondary = EntryPoint({}, {"lib": {"entryFile": "index.ts"}}, "/lib/testing", primary)
    package = LibraryPackage(base_path="/lib", primary=primary, secondaries=[secondary])
    assert check_package(package) == [primary, secondary]


def test_check_package_reports_first_broken_entry_point(primary):
    broken = EntryPoint({}, {}, "/lib/forms", primary)
    package = LibraryPackage(base_path="/lib", primary=primary, secondaries=[broken])
    with pytest.raises(EntryPointConfigError) as exc_info:
        check_package(package)
    assert exc_info.value.entry_point is broken
