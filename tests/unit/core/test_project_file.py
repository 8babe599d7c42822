"""Unit tests for the MSBuild project file model."""

import re
from pathlib import Path

import pytest
from appxsync.core.errors import InvalidProjectFileError
from appxsync.core.project_file import ProjectFile, from_msbuild_path, to_msbuild_path

MSBUILD = "http://schemas.microsoft.com/developer/msbuild/2003"

PROJECT = f"""<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="4.0" xmlns="{MSBUILD}">
  <ItemGroup>
    <Content Include="images\\logo.png" />
    <Content Include="www\\index.html" />
  </ItemGroup>
  <ItemGroup>
    <Content Include="www\\js\\index.js" />
  </ItemGroup>
</Project>
"""


@pytest.fixture
def project_path(tmp_path: Path) -> Path:
    path = tmp_path / "App.jsproj"
    path.write_text(PROJECT, encoding="utf-8")
    return path


class TestPathConversion:
    """Tests for MSBuild path separator helpers."""

    def test_to_msbuild_path(self) -> None:
        assert to_msbuild_path("www/js/index.js") == "www\\js\\index.js"

    def test_from_msbuild_path(self) -> None:
        assert from_msbuild_path("www\\js\\index.js") == "www/js/index.js"


class TestProjectFile:
    """Tests for ProjectFile."""

    def test_source_files(self, project_path: Path) -> None:
        """source_files lists Content includes with forward slashes."""
        project = ProjectFile.load(project_path)

        assert project.source_files() == ["images/logo.png", "www/index.html", "www/js/index.js"]

    def test_remove_source_files(self, project_path: Path) -> None:
        """Matching items are removed and empty groups dropped."""
        project = ProjectFile.load(project_path)

        removed = project.remove_source_files(re.compile(r"^www\\"))

        assert removed == 2
        assert project.source_files() == ["images/logo.png"]

    def test_add_source_files(self, project_path: Path) -> None:
        """New paths are appended as one item group."""
        project = ProjectFile.load(project_path)

        added = project.add_source_files(["www/a.js", "www/b/c.css"])

        assert added == 2
        assert project.source_files()[-2:] == ["www/a.js", "www/b/c.css"]

    def test_add_nothing_creates_no_group(self, project_path: Path) -> None:
        """Adding an empty list leaves the document untouched."""
        project = ProjectFile.load(project_path)

        assert project.add_source_files([]) == 0
        project.write()

        assert project_path.read_text(encoding="utf-8").count("<ItemGroup") == 2

    def test_write_uses_backslashes_and_default_namespace(self, project_path: Path) -> None:
        """Written includes use MSBuild separators and no generated prefixes."""
        project = ProjectFile.load(project_path)
        project.add_source_files(["www/css/site.css"])
        project.write()

        content = project_path.read_text(encoding="utf-8")
        assert 'Include="www\\css\\site.css"' in content
        assert f'xmlns="{MSBUILD}"' in content
        assert "ns0:" not in content

    def test_rejects_non_project_root(self, tmp_path: Path) -> None:
        """A well-formed XML file that is not a Project is rejected."""
        path = tmp_path / "App.jsproj"
        path.write_text("<Package />", encoding="utf-8")

        with pytest.raises(InvalidProjectFileError, match="Not an MSBuild project"):
            ProjectFile.load(path)

    def test_rejects_malformed_xml(self, tmp_path: Path) -> None:
        """Malformed XML raises InvalidProjectFileError."""
        path = tmp_path / "App.jsproj"
        path.write_text("<Project><ItemGroup></Project>", encoding="utf-8")

        with pytest.raises(InvalidProjectFileError):
            ProjectFile.load(path)

    def test_rejects_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises InvalidProjectFileError."""
        with pytest.raises(InvalidProjectFileError):
            ProjectFile.load(tmp_path / "missing.jsproj")
