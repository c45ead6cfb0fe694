"""Pytest configuration and fixtures for fedoractl tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FEDORA_* variables from the developer shell out of tests."""
    for name in (
        "FEDORA_URL",
        "FEDORA_USER",
        "FEDORA_PASSWORD",
        "FEDORA_PROFILE",
        "FEDORA_VERIFY_SSL",
        "FEDORA_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_config_yaml() -> str:
    """Sample config YAML content."""
    return """
default_profile: test
output_format: table

profiles:
  test:
    url: http://localhost:8080/fedora
    user: fedoraAdmin
    verify_ssl: false
    timeout: 30

  production:
    url: https://repo.example.org/fedora
    verify_ssl: true
    timeout: 60
    open_timeout: 5
    validate_checksum: true
"""


@pytest.fixture
def repository_profile_xml() -> str:
    """``describe?xml=true`` document."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<fedoraRepository xmlns="http://www.fedora.info/definitions/1/0/access/"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <repositoryName>Fedora Repository</repositoryName>
  <repositoryBaseURL>http://localhost:8080/fedora</repositoryBaseURL>
  <repositoryVersion>3.8</repositoryVersion>
  <repositoryPID>
    <PID-namespaceIdentifier>changeme</PID-namespaceIdentifier>
    <PID-delimiter>:</PID-delimiter>
    <PID-sample>changeme:100</PID-sample>
  </repositoryPID>
  <repositoryOAI-identifier>
    <OAI-namespaceIdentifier>example.org</OAI-namespaceIdentifier>
    <OAI-delimiter>:</OAI-delimiter>
  </repositoryOAI-identifier>
  <sampleSearch-URL>http://localhost:8080/fedora/objects</sampleSearch-URL>
  <adminEmail>bob@example.org</adminEmail>
  <adminEmail>sally@example.org</adminEmail>
  <objModels>
    <model>info:fedora/fedora-system:FedoraObject-3.0</model>
    <model>info:fedora/fedora-system:ContentModel-3.0</model>
    <model>info:fedora/fedora-system:ServiceDefinition-3.0</model>
  </objModels>
</fedoraRepository>
"""


@pytest.fixture
def object_profile_xml() -> str:
    """``objects/{pid}?format=xml`` document."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<objectProfile xmlns="http://www.fedora.info/definitions/1/0/access/" pid="demo:1">
  <objLabel>Sample object</objLabel>
  <objOwnerId>fedoraAdmin</objOwnerId>
  <objModels>
    <model>info:fedora/fedora-system:FedoraObject-3.0</model>
  </objModels>
  <objCreateDate>2012-03-14T15:09:26.531Z</objCreateDate>
  <objLastModDate>2013-01-02T03:04:05.678Z</objLastModDate>
  <objDissIndexViewURL>http://localhost:8080/fedora/objects/demo%3A1/methods/fedora-system%3A3/viewMethodIndex</objDissIndexViewURL>
  <objItemIndexViewURL>http://localhost:8080/fedora/objects/demo%3A1/methods/fedora-system%3A3/viewItemIndex</objItemIndexViewURL>
  <objState>A</objState>
</objectProfile>
"""


@pytest.fixture
def datastream_profile_xml() -> str:
    """``objects/{pid}/datastreams/{dsid}?format=xml`` document."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<datastreamProfile xmlns="http://www.fedora.info/definitions/1/0/management/"
    pid="test:1" dsID="content">
  <dsLabel>Content</dsLabel>
  <dsVersionID>content.1</dsVersionID>
  <dsCreateDate>2010-01-02T00:00:00.000Z</dsCreateDate>
  <dsState>A</dsState>
  <dsMIME>text/plain</dsMIME>
  <dsFormatURI></dsFormatURI>
  <dsControlGroup>M</dsControlGroup>
  <dsSize>42</dsSize>
  <dsVersionable>true</dsVersionable>
  <dsInfoType></dsInfoType>
  <dsLocation>test:1+content+content.1</dsLocation>
  <dsLocationType>INTERNAL_ID</dsLocationType>
  <dsChecksumType>DISABLED</dsChecksumType>
  <dsChecksum>none</dsChecksum>
  <dsChecksumValid>false</dsChecksumValid>
</datastreamProfile>
"""


@pytest.fixture
def datastream_history_xml() -> str:
    """``objects/{pid}/datastreams/{dsid}/history?format=xml`` document."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<datastreamHistory xmlns="http://www.fedora.info/definitions/1/0/management/"
    pid="test:1" dsID="content">
  <datastreamProfile pid="test:1" dsID="content">
    <dsLabel>Content v1</dsLabel>
    <dsVersionID>content.1</dsVersionID>
    <dsCreateDate>2010-01-02T00:00:00.000Z</dsCreateDate>
    <dsMIME>text/plain</dsMIME>
    <dsSize>12</dsSize>
  </datastreamProfile>
  <datastreamProfile pid="test:1" dsID="content">
    <dsLabel>Content v0</dsLabel>
    <dsVersionID>content.0</dsVersionID>
    <dsCreateDate>2008-08-05T01:30:05.012Z</dsCreateDate>
    <dsMIME>text/plain</dsMIME>
    <dsSize>8</dsSize>
  </datastreamProfile>
</datastreamHistory>
"""


@pytest.fixture
def datastream_history_no_ns_xml() -> str:
    """Datastream history as served without a namespace declaration."""
    return """<datastreamHistory pid="test:1" dsID="content">
  <datastreamProfile>
    <dsLabel>Content v1</dsLabel>
    <dsVersionID>content.1</dsVersionID>
    <dsCreateDate>2010-01-02T00:00:00.000Z</dsCreateDate>
  </datastreamProfile>
  <datastreamProfile>
    <dsLabel>Content v0</dsLabel>
    <dsVersionID>content.0</dsVersionID>
    <dsCreateDate>2008-08-05T01:30:05.012Z</dsCreateDate>
  </datastreamProfile>
</datastreamHistory>
"""


@pytest.fixture
def object_history_xml() -> str:
    """``objects/{pid}/versions?format=xml`` document."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<fedoraObjectHistory xmlns="http://www.fedora.info/definitions/1/0/access/" pid="demo:1">
  <objectChangeDate>2008-07-02T05:09:43.234Z</objectChangeDate>
  <objectChangeDate>2008-07-02T05:09:43.375Z</objectChangeDate>
  <objectChangeDate>2010-03-02T17:12:04.612Z</objectChangeDate>
</fedoraObjectHistory>
"""
