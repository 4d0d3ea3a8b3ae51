"""Tests for Quarkus module inspection."""

from pathlib import Path

import pytest

from quarkus_inspector.host import InMemoryProject, StaticModule
from quarkus_inspector.inspector import (
    QUARKUS_CORE_PATTERN,
    QUARKUS_STANDARD_VERSIONING,
    check_quarkus_version,
    detect_quarkus_version,
    get_application_url,
    get_content_roots,
    get_dev_ui_url,
    get_module_dir_path,
    get_modules_uris,
    get_port,
    has_library,
    is_quarkus_module,
    is_quarkus_properties_file,
    is_quarkus_web_app_module,
    is_quarkus_yaml_file,
    normalize,
    sort_roots,
)
from quarkus_inspector.utils.properties import PropertiesFile


def module_with_classpath(*jars: str) -> tuple[InMemoryProject, StaticModule]:
    module = StaticModule(name="m", classpath=list(jars))
    return InMemoryProject([module]), module


class TestModuleDetection:
    """Tests for library-based module detection."""

    def test_none_module_is_not_quarkus(self, project):
        """None module returns False."""
        assert is_quarkus_module(None, project) is False
        assert is_quarkus_web_app_module(None, project) is False

    def test_quarkus_core_library(self, project, quarkus_module):
        """Library containing quarkus-core is detected."""
        assert is_quarkus_module(quarkus_module, project) is True

    def test_quarkus_core_substring(self):
        """Any name containing quarkus-core matches."""
        module = StaticModule(name="m", libraries=["quarkus-core-1.2.3"])
        assert is_quarkus_module(module, InMemoryProject([module])) is True

    def test_plain_module(self, project, plain_module):
        """Module without quarkus-core is not Quarkus."""
        assert is_quarkus_module(plain_module, project) is False
        assert is_quarkus_web_app_module(plain_module, project) is False

    def test_web_app_module(self, project, quarkus_module):
        """quarkus-vertx-http marks a web application."""
        assert is_quarkus_web_app_module(quarkus_module, project) is True

    def test_core_only_is_not_web_app(self):
        """quarkus-core alone is not a web application."""
        module = StaticModule(name="m", libraries=["Maven: io.quarkus:quarkus-core:3.8.1"])
        project = InMemoryProject([module])
        assert is_quarkus_module(module, project) is True
        assert is_quarkus_web_app_module(module, project) is False

    def test_unnamed_library_ignored(self):
        """Unnamed (None) libraries never match."""
        module = StaticModule(name="m", libraries=[None])
        assert has_library(module, InMemoryProject([module]), "quarkus-core") is False


class TestVersionPatterns:
    """Tests for the two-stage version patterns."""

    def test_loose_pattern_accepts_snapshot(self):
        """quarkus-core jar with non-standard version is still a quarkus-core jar."""
        match = QUARKUS_CORE_PATTERN.fullmatch("quarkus-core-999-SNAPSHOT.jar")
        assert match is not None
        assert match.group(1) == "999-SNAPSHOT"

    def test_loose_pattern_rejects_other_artifacts(self):
        """Other quarkus artifacts are not matched."""
        assert QUARKUS_CORE_PATTERN.fullmatch("quarkus-core-deployment-2.0.0.jar") is None
        assert QUARKUS_CORE_PATTERN.fullmatch("quarkus-arc-2.0.0.jar") is None
        assert QUARKUS_CORE_PATTERN.fullmatch("quarkus-core-2.0.0xjar") is None

    def test_strict_pattern_final(self):
        """Final versions match."""
        match = QUARKUS_STANDARD_VERSIONING.fullmatch("2.13.5.Final")
        assert match is not None
        assert match.group(1, 2, 3) == ("2", "13", "5")
        assert match.group(4) == ".Final"

    def test_strict_pattern_redhat(self):
        """Red Hat builds match."""
        match = QUARKUS_STANDARD_VERSIONING.fullmatch("2.13.7.Final-redhat-00003")
        assert match is not None
        assert match.group(5) == "-redhat-00003"

    def test_strict_pattern_rejects_snapshot(self):
        """Snapshot versions do not match."""
        assert QUARKUS_STANDARD_VERSIONING.fullmatch("999-SNAPSHOT") is None


class TestCheckQuarkusVersion:
    """Tests for check_quarkus_version."""

    def test_predicate_receives_groups(self, project, quarkus_module):
        """Predicate gets major, minor and patch groups."""
        seen = []

        def predicate(match):
            seen.append(match.group(1, 2, 3))
            return True

        assert check_quarkus_version(quarkus_module, project, predicate, False) is True
        assert seen == [("2", "13", "5")]

    def test_predicate_result_returned(self, project, quarkus_module):
        """Predicate result is returned as-is."""
        assert check_quarkus_version(
            quarkus_module, project, lambda m: int(m.group(1)) >= 3, True
        ) is False

    def test_snapshot_gives_non_matching(self):
        """Non-standard version passes None to the predicate."""
        project, module = module_with_classpath("/repo/quarkus-core-999-SNAPSHOT.jar")
        received = []

        def predicate(match):
            received.append(match)
            return match is not None

        assert check_quarkus_version(module, project, predicate, True) is False
        assert received == [None]

    @pytest.mark.parametrize("default", [True, False])
    def test_no_quarkus_returns_default(self, project, plain_module, default):
        """Default is returned unchanged when no quarkus-core jar exists."""

        def predicate(match):
            raise AssertionError("predicate must not be called")

        assert check_quarkus_version(plain_module, project, predicate, default) is default

    def test_first_matching_jar_wins(self):
        """Only the first quarkus-core jar is considered."""
        project, module = module_with_classpath(
            "/a/quarkus-core-1.13.7.Final.jar",
            "/b/quarkus-core-3.0.0.jar",
        )
        assert check_quarkus_version(module, project, lambda m: m.group(1) == "1", False)

    def test_jar_url_root(self):
        """Jar roots in jar URL form are recognized."""
        project, module = module_with_classpath("/repo/quarkus-core-3.8.1.jar!/")
        assert detect_quarkus_version(module, project) == "3.8.1"

    def test_windows_classpath_root(self):
        """Backslash separated jar paths are split on either separator."""
        project, module = module_with_classpath("C:\\m2\\io\\quarkus-core-3.8.1.jar")
        assert detect_quarkus_version(module, project) == "3.8.1"
        assert check_quarkus_version(module, project, lambda m: m.group(1) == "3", False)

    def test_detect_version_none(self, project, plain_module):
        """No quarkus-core jar gives no version."""
        assert detect_quarkus_version(plain_module, project) is None


class TestConfigFiles:
    """Tests for configuration file classification."""

    @pytest.mark.parametrize(
        "name",
        [
            "application.properties",
            "application-prod.properties",
            "microprofile-config.properties",
            "microprofile-config-test.properties",
        ],
    )
    def test_properties_accepted(self, project, name):
        """Quarkus properties names in a Quarkus module are accepted."""
        file = f"/work/getting-started/src/main/resources/{name}"
        assert is_quarkus_properties_file(file, project) is True

    @pytest.mark.parametrize(
        "name", ["config.properties", "application.yaml", "myapplication.properties"]
    )
    def test_properties_rejected_by_name(self, project, name):
        """Other names are rejected even in a Quarkus module."""
        file = f"/work/getting-started/src/main/resources/{name}"
        assert is_quarkus_properties_file(file, project) is False

    def test_properties_in_plain_module(self, project):
        """application.properties outside a Quarkus module is rejected."""
        assert is_quarkus_properties_file("/work/plain/application.properties", project) is False

    def test_properties_without_module(self, project):
        """File not owned by any module is rejected."""
        assert is_quarkus_properties_file("/elsewhere/application.properties", project) is False

    def test_facet_enables_module(self):
        """Quarkus facet enables a module without quarkus libraries."""
        module = StaticModule(name="m", content_roots=["/work/m"], facets={"quarkus"})
        project = InMemoryProject([module])
        assert is_quarkus_properties_file("/work/m/application.properties", project) is True
        assert is_quarkus_yaml_file("/work/m/application.yml", project) is True

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("application.yaml", True),
            ("application.yml", True),
            ("application-dev.yml", True),
            ("application.properties", False),
            ("config.yaml", False),
        ],
    )
    def test_yaml_name_only(self, name, expected):
        """Single-argument form checks the name only."""
        assert is_quarkus_yaml_file(Path("/anywhere") / name) is expected

    def test_yaml_with_project(self, project):
        """Two-argument form also requires a Quarkus module."""
        assert is_quarkus_yaml_file("/work/getting-started/application.yaml", project) is True
        assert is_quarkus_yaml_file("/work/plain/application.yaml", project) is False


class TestContentRoots:
    """Tests for content root ordering and module directory."""

    def test_sorted_by_length(self):
        """Shortest root first."""
        module = StaticModule(name="m", content_roots=["/a/b/generated", "/a"])
        assert get_content_roots(module, InMemoryProject([module])) == ["/a", "/a/b/generated"]

    def test_single_root_unchanged(self):
        """Single root is returned as-is."""
        module = StaticModule(name="m", content_roots=["/a/b"])
        assert get_content_roots(module, InMemoryProject([module])) == ["/a/b"]

    def test_sort_roots_in_place(self):
        """sort_roots sorts a list in place."""
        roots = ["/x/target/generated-sources", "/x", "/x/src"]
        sort_roots(roots)
        assert roots == ["/x", "/x/src", "/x/target/generated-sources"]

    def test_module_dir_is_first_root(self):
        """Module dir is the shortest content root."""
        module = StaticModule(name="m", content_roots=["/p/target/gen", "/p"])
        assert get_module_dir_path(module, InMemoryProject([module])) == Path("/p")

    def test_module_dir_fallback(self, tmp_path):
        """Without content roots, the declared directory is used if it exists."""
        module = StaticModule(name="m", module_dir=str(tmp_path))
        assert get_module_dir_path(module, InMemoryProject([module])) == tmp_path

    def test_module_dir_missing(self, tmp_path):
        """Missing declared directory gives None."""
        module = StaticModule(name="m", module_dir=str(tmp_path / "gone"))
        assert get_module_dir_path(module, InMemoryProject([module])) is None

    def test_module_dir_undeclared(self):
        """No roots and no declared directory gives None."""
        module = StaticModule(name="m")
        assert get_module_dir_path(module, InMemoryProject([module])) is None

    def test_modules_uris(self, tmp_path):
        """Every module contributes its URI."""
        first = StaticModule(name="a", module_dir=str(tmp_path / "a"))
        second = StaticModule(name="b", content_roots=[str(tmp_path / "b")])
        uris = get_modules_uris(InMemoryProject([first, second]))
        assert uris == {(tmp_path / "a").as_uri(), (tmp_path / "b").as_uri()}

    def test_modules_uris_skip_unlocated_modules(self, tmp_path):
        """Modules without directory or content roots have no URI."""
        located = StaticModule(name="a", module_dir=str(tmp_path))
        floating = StaticModule(name="floating")
        project = InMemoryProject([located, floating])
        assert project.module_uri(floating) is None
        assert get_modules_uris(project) == {tmp_path.as_uri()}


class TestNormalize:
    """Tests for normalize."""

    @pytest.mark.parametrize(
        "path, expected",
        [("q", "/q/"), ("/a/b/", "/a/b/"), ("", "/"), ("/", "/"), ("a/b", "/a/b/"), ("/x", "/x/")],
    )
    def test_normalize(self, path, expected):
        assert normalize(path) == expected


class TestUrls:
    """Tests for application and Dev UI URLs."""

    def test_application_url_defaults(self):
        """Default port and root path."""
        assert get_application_url(PropertiesFile()) == "http://localhost:8080/"

    def test_application_url_configured(self):
        """Configured port and root path."""
        properties = PropertiesFile(
            {"quarkus.http.port": "9090", "quarkus.http.root-path": "/api"}
        )
        assert get_application_url(properties) == "http://localhost:9090/api/"

    def test_dev_port_overrides(self):
        """%dev port takes precedence."""
        properties = PropertiesFile(
            {"quarkus.http.port": "9090", "%dev.quarkus.http.port": "7070"}
        )
        assert get_port(properties) == 7070

    def test_dev_port_absent_keeps_port(self):
        """Without %dev port the configured port is kept."""
        assert get_port(PropertiesFile({"quarkus.http.port": "9090"})) == 9090

    def test_invalid_port_uses_default(self):
        """Non-integer port falls back to 8080."""
        assert get_port(PropertiesFile({"quarkus.http.port": "abc"})) == 8080

    def test_dev_ui_url_defaults(self):
        """Default Dev UI URL."""
        assert get_dev_ui_url(PropertiesFile()) == "http://localhost:8080/q/dev"

    def test_dev_ui_url_relative_to_root_path(self):
        """Relative non-application path is nested under the root path."""
        properties = PropertiesFile(
            {"quarkus.http.root-path": "api", "quarkus.http.non-application-root-path": "internal"}
        )
        assert get_dev_ui_url(properties) == "http://localhost:8080/api/internal/dev"

    def test_dev_ui_url_absolute_path(self):
        """Absolute non-application path ignores the root path."""
        properties = PropertiesFile(
            {
                "quarkus.http.port": "9000",
                "quarkus.http.root-path": "/api",
                "quarkus.http.non-application-root-path": "/q",
            }
        )
        assert get_dev_ui_url(properties) == "http://localhost:9000/q/dev"
