"""Pytest fixtures for quarkus-inspector tests."""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from quarkus_inspector.host import InMemoryProject, StaticModule  # noqa: E402


@pytest.fixture
def quarkus_module():
    """Module with Quarkus core and web libraries."""
    return StaticModule(
        name="getting-started",
        libraries=[
            "Maven: io.quarkus:quarkus-core:2.13.5.Final",
            "Maven: io.quarkus:quarkus-vertx-http:2.13.5.Final",
            "Maven: io.smallrye.config:smallrye-config:2.12.0",
        ],
        classpath=[
            "/home/user/.m2/repository/io/smallrye/smallrye-config-2.12.0.jar",
            "/home/user/.m2/repository/io/quarkus/quarkus-core-2.13.5.Final.jar",
            "/home/user/.m2/repository/io/quarkus/quarkus-core-deployment-2.13.5.Final.jar",
        ],
        content_roots=["/work/getting-started"],
    )


@pytest.fixture
def plain_module():
    """Module without any Quarkus library."""
    return StaticModule(
        name="plain",
        libraries=["Maven: org.slf4j:slf4j-api:2.0.9", None],
        classpath=["/home/user/.m2/repository/org/slf4j/slf4j-api-2.0.9.jar"],
        content_roots=["/work/plain"],
    )


@pytest.fixture
def project(quarkus_module, plain_module):
    """Project holding the Quarkus and plain modules."""
    return InMemoryProject([quarkus_module, plain_module])


@pytest.fixture
def sample_properties():
    """Sample application.properties content."""
    return "\n".join(
        [
            "# HTTP configuration",
            "quarkus.http.port=9090",
            "quarkus.http.root-path=/api",
            "! legacy comment style",
            "%dev.quarkus.http.port : 9091",
            "greeting.message = hello \\",
            "    world",
            "",
        ]
    )
