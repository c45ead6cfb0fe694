"""Tests for fedoractl.core.profiles module."""

from __future__ import annotations

import logging
from datetime import datetime

import pytest

from fedoractl.core.exceptions import InvalidArgumentError, ParseError
from fedoractl.core.profiles import (
    ACCESS_NS,
    ensure_namespace,
    parse_datastream_history,
    parse_datastream_profile,
    parse_object_history,
    parse_object_profile,
    parse_repository_profile,
    parse_version_history,
)


class TestEnsureNamespace:
    """Tests for ensure_namespace."""

    def test_injects_when_missing(self):
        xml = "<a><objectChangeDate>x</objectChangeDate><fedoraObjectHistory/></a>"
        result = ensure_namespace(xml, "fedoraObjectHistory", ACCESS_NS)
        assert f'<fedoraObjectHistory xmlns="{ACCESS_NS}"/>' in result

    def test_leaves_declared_namespace(self):
        xml = '<fedoraObjectHistory xmlns="urn:x"/>'
        assert ensure_namespace(xml, "fedoraObjectHistory", ACCESS_NS) == xml

    def test_does_not_touch_longer_tag_names(self):
        xml = "<datastreamProfileList/>"
        assert ensure_namespace(xml, "datastreamProfile", ACCESS_NS) == xml


class TestRepositoryProfile:
    """Tests for parse_repository_profile."""

    def test_collapses_single_values(self, repository_profile_xml):
        profile = parse_repository_profile(repository_profile_xml)
        assert profile["repositoryVersion"] == "3.8"
        assert profile["repositoryName"] == "Fedora Repository"

    def test_obj_models_stay_a_list(self, repository_profile_xml):
        profile = parse_repository_profile(repository_profile_xml)
        assert profile["objModels"] == [
            "info:fedora/fedora-system:FedoraObject-3.0",
            "info:fedora/fedora-system:ContentModel-3.0",
            "info:fedora/fedora-system:ServiceDefinition-3.0",
        ]

    def test_single_obj_model_stays_a_list(self):
        xml = (
            f'<fedoraRepository xmlns="{ACCESS_NS}">'
            "<repositoryVersion>3.8</repositoryVersion>"
            "<objModels><model>m1</model></objModels>"
            "</fedoraRepository>"
        )
        profile = parse_repository_profile(xml)
        assert profile["objModels"] == ["m1"]

    def test_repeated_field_is_list(self, repository_profile_xml):
        profile = parse_repository_profile(repository_profile_xml)
        assert profile["adminEmail"] == ["bob@example.org", "sally@example.org"]

    def test_nested_fields(self, repository_profile_xml):
        profile = parse_repository_profile(repository_profile_xml)
        assert profile["repositoryPID"]["PID-namespaceIdentifier"] == "changeme"
        assert profile["repositoryOAI-identifier"]["OAI-delimiter"] == ":"

    def test_namespace_injected(self):
        xml = "<fedoraRepository><repositoryVersion>3.4</repositoryVersion></fedoraRepository>"
        assert parse_repository_profile(xml)["repositoryVersion"] == "3.4"

    def test_bytes_input(self, repository_profile_xml):
        profile = parse_repository_profile(repository_profile_xml.encode("utf-8"))
        assert profile["repositoryVersion"] == "3.8"

    def test_malformed_returns_none(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fedoractl.core.profiles"):
            assert parse_repository_profile("<fedoraRepository><oops>") is None
        assert "repository profile" in caplog.text

    def test_wrong_root_returns_none(self):
        assert parse_repository_profile(f'<html xmlns="{ACCESS_NS}"/>') is None

    def test_empty_returns_none(self):
        assert parse_repository_profile("") is None
        assert parse_repository_profile(None) is None

    def test_repeated_nested_field_is_list(self):
        xml = (
            f'<fedoraRepository xmlns="{ACCESS_NS}"><repositoryPID>'
            "<PID-namespaceIdentifier>changeme</PID-namespaceIdentifier>"
            "<retainPID>demo</retainPID><retainPID>test</retainPID>"
            "</repositoryPID></fedoraRepository>"
        )
        pid_settings = parse_repository_profile(xml)["repositoryPID"]
        assert pid_settings["retainPID"] == ["demo", "test"]
        assert pid_settings["PID-namespaceIdentifier"] == "changeme"

    def test_latin1_bytes(self):
        xml = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            f'<fedoraRepository xmlns="{ACCESS_NS}">'
            "<repositoryName>Dépôt</repositoryName></fedoraRepository>"
        ).encode("latin-1")
        assert parse_repository_profile(xml)["repositoryName"] == "Dépôt"

    def test_undecodable_bytes_returns_none(self):
        xml = f'<fedoraRepository xmlns="{ACCESS_NS}"><repositoryName>D\xe9p\xf4t</repositoryName>'
        assert parse_repository_profile(xml.encode("latin-1") + b"</fedoraRepository>") is None


class TestObjectProfile:
    """Tests for parse_object_profile."""

    def test_fields(self, object_profile_xml):
        profile = parse_object_profile(object_profile_xml)
        assert profile["pid"] == "demo:1"
        assert profile["objLabel"] == "Sample object"
        assert profile["objOwnerId"] == "fedoraAdmin"
        assert profile["objState"] == "A"
        assert profile["objModels"] == ["info:fedora/fedora-system:FedoraObject-3.0"]

    def test_dates_parsed(self, object_profile_xml):
        profile = parse_object_profile(object_profile_xml)
        created = profile["objCreateDate"]
        assert isinstance(created, datetime)
        assert (created.year, created.month, created.day) == (2012, 3, 14)
        assert created.utcoffset().total_seconds() == 0

    def test_empty_obj_models(self):
        xml = f'<objectProfile xmlns="{ACCESS_NS}" pid="demo:2"><objModels/></objectProfile>'
        assert parse_object_profile(xml)["objModels"] == []

    def test_empty_input(self):
        assert parse_object_profile("") == {}
        assert parse_object_profile(None) == {}

    def test_malformed_raises(self):
        with pytest.raises(ParseError):
            parse_object_profile("<objectProfile><objLabel>")

    def test_text_with_foreign_encoding_declaration(self):
        xml = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
            f'<objectProfile xmlns="{ACCESS_NS}" pid="demo:1"><objLabel>Café</objLabel></objectProfile>'
        )
        assert parse_object_profile(xml)["objLabel"] == "Café"

    def test_undecodable_bytes_raises_parse_error(self):
        xml = f'<objectProfile xmlns="{ACCESS_NS}"><objLabel>Caf\xe9</objLabel></objectProfile>'
        with pytest.raises(ParseError):
            parse_object_profile(xml.encode("latin-1"))


class TestDatastreamProfile:
    """Tests for parse_datastream_profile."""

    def test_fields(self, datastream_profile_xml):
        profile = parse_datastream_profile(datastream_profile_xml)
        assert profile["pid"] == "test:1"
        assert profile["dsID"] == "content"
        assert profile["dsControlGroup"] == "M"
        assert profile["dsState"] == "A"
        assert profile["dsMIME"] == "text/plain"
        assert profile["dsLabel"] == "Content"

    def test_coercions(self, datastream_profile_xml):
        profile = parse_datastream_profile(datastream_profile_xml)
        assert profile["dsSize"] == 42
        assert profile["dsVersionable"] is True
        assert profile["dsChecksumValid"] is False
        assert isinstance(profile["dsCreateDate"], datetime)

    def test_empty_elements_are_none(self, datastream_profile_xml):
        profile = parse_datastream_profile(datastream_profile_xml)
        assert profile["dsFormatURI"] is None
        assert profile["dsInfoType"] is None

    def test_namespace_injected(self):
        xml = '<datastreamProfile pid="a:1" dsID="DC"><dsState>I</dsState></datastreamProfile>'
        profile = parse_datastream_profile(xml)
        assert profile["dsState"] == "I"
        assert profile["dsID"] == "DC"

    def test_empty_input(self):
        assert parse_datastream_profile("") == {}

    def test_wrong_root_raises(self):
        with pytest.raises(ParseError):
            parse_datastream_profile(f'<objectProfile xmlns="{ACCESS_NS}"/>')


class TestVersionHistory:
    """Tests for datastream and object history parsing."""

    def test_datastream_history_keyed_by_date(self, datastream_history_xml):
        history = parse_datastream_history(datastream_history_xml)
        assert list(history) == ["2010-01-02T00:00:00.000Z", "2008-08-05T01:30:05.012Z"]
        assert history["2008-08-05T01:30:05.012Z"]["dsVersionID"] == "content.0"
        assert history["2010-01-02T00:00:00.000Z"]["dsSize"] == 12

    def test_datastream_history_without_namespace(self, datastream_history_no_ns_xml):
        history = parse_datastream_history(datastream_history_no_ns_xml)
        assert len(history) == 2
        version = history["2010-01-02T00:00:00.000Z"]
        assert version["dsLabel"] == "Content v1"
        assert version["pid"] == "test:1"
        assert version["dsID"] == "content"

    def test_duplicate_date_last_wins(self):
        xml = (
            "<datastreamHistory>"
            "<datastreamProfile><dsCreateDate>d</dsCreateDate><dsLabel>a</dsLabel></datastreamProfile>"
            "<datastreamProfile><dsCreateDate>d</dsCreateDate><dsLabel>b</dsLabel></datastreamProfile>"
            "</datastreamHistory>"
        )
        history = parse_datastream_history(xml)
        assert history["d"]["dsLabel"] == "b"

    def test_empty_datastream_history(self):
        assert parse_datastream_history("") == {}

    def test_object_history(self, object_history_xml):
        assert parse_object_history(object_history_xml) == [
            "2008-07-02T05:09:43.234Z",
            "2008-07-02T05:09:43.375Z",
            "2010-03-02T17:12:04.612Z",
        ]

    def test_object_history_without_namespace(self):
        xml = (
            '<fedoraObjectHistory pid="demo:1">'
            "<objectChangeDate>2008-07-02T05:09:43.234Z</objectChangeDate>"
            "</fedoraObjectHistory>"
        )
        assert parse_object_history(xml) == ["2008-07-02T05:09:43.234Z"]

    def test_dispatch_by_kind(self, object_history_xml, datastream_history_xml):
        assert len(parse_version_history("object", object_history_xml)) == 3
        assert len(parse_version_history("datastream", datastream_history_xml)) == 2

    def test_unknown_kind(self):
        with pytest.raises(InvalidArgumentError):
            parse_version_history("relationship", "<x/>")
