"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from appxsync.models.app_config import AppConfig, Resource

APPX_NS = "http://schemas.microsoft.com/appx/2010/manifest"
M2_NS = "http://schemas.microsoft.com/appx/2013/manifest"
MSBUILD_NS = "http://schemas.microsoft.com/developer/msbuild/2003"


LEGACY_MANIFEST = f"""<?xml version="1.0" encoding="utf-8"?>
<Package xmlns="{APPX_NS}" xmlns:m2="{M2_NS}">
  <Identity Name="$guid1$" Version="1.0.0.0" Publisher="CN=$username$" />
  <Properties>
    <DisplayName>$projectname$</DisplayName>
    <PublisherDisplayName>$username$</PublisherDisplayName>
    <Logo>images\\storelogo.png</Logo>
  </Properties>
  <Applications>
    <Application Id="App" StartPage="www/index.html">
      <m2:VisualElements DisplayName="$projectname$" Description="CordovaApp" />
    </Application>
  </Applications>
  <Capabilities>
    <DeviceCapability Name="webcam" />
    <Capability Name="internetClient" />
  </Capabilities>
</Package>
"""

JSPROJ = f"""<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="4.0" DefaultTargets="Build" xmlns="{MSBUILD_NS}">
  <ItemGroup>
    <AppxManifest Include="package.appxmanifest" />
  </ItemGroup>
  <ItemGroup>
    <Content Include="images\\logo.png" />
    <Content Include="www\\old.js" />
    <Content Include="WWW\\css\\index.css" />
  </ItemGroup>
  <ItemGroup>
    <Content Include="$(MSBuildThisFileDirectory)www\\cordova.js" />
  </ItemGroup>
</Project>
"""

CONFIG_XML = """<?xml version="1.0" encoding="utf-8"?>
<widget xmlns="http://www.w3.org/ns/widgets" xmlns:cdv="http://cordova.apache.org/ns/1.0"
        id="com.example.hello" version="1.2">
  <name>Hello World</name>
  <author email="dev@example.com">Example Corp</author>
  <icon src="res/icon.png" />
  <platform name="windows8">
    <icon src="res/windows/logo.png" width="150" height="150" />
    <icon src="res/windows/smalllogo.png" width="30" height="30" />
    <splash src="res/windows/splash.png" width="620" height="300" />
  </platform>
</widget>
"""


@pytest.fixture
def app_config() -> AppConfig:
    """App descriptor with a shared default icon and Windows-specific images."""
    return AppConfig(
        name="Hello World",
        version="1.2",
        package_name="com.example.hello",
        author="Example Corp",
        icons=[
            Resource(src="res/windows/logo.png", width=150, height=150, platform="windows8"),
            Resource(src="res/icon.png"),
        ],
        splash_screens=[
            Resource(src="res/windows/splash.png", width=620, height=300, platform="windows8"),
        ],
    )


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    """A Windows 8.1 package.appxmanifest as generated by the project template."""
    path = tmp_path / "package.appxmanifest"
    path.write_text(LEGACY_MANIFEST, encoding="utf-8")
    return path


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """App root with config.xml, www sources and image resources."""
    root = tmp_path / "app"
    (root / "www" / "js").mkdir(parents=True)
    (root / "www" / "index.html").write_text("<html></html>")
    (root / "www" / "js" / "index.js").write_text("console.log('hi');")
    (root / "res" / "windows").mkdir(parents=True)
    (root / "res" / "icon.png").write_bytes(b"\x89PNG default")
    (root / "res" / "windows" / "logo.png").write_bytes(b"\x89PNG logo")
    (root / "res" / "windows" / "smalllogo.png").write_bytes(b"\x89PNG small")
    (root / "res" / "windows" / "splash.png").write_bytes(b"\x89PNG splash")
    (root / "config.xml").write_text(CONFIG_XML, encoding="utf-8")
    return root


@pytest.fixture
def legacy_project_dir(app_root: Path) -> Path:
    """Legacy (.jsproj) Windows project under app_root/platforms/windows."""
    project = app_root / "platforms" / "windows"
    (project / "www" / "js").mkdir(parents=True)
    (project / "www" / "index.html").write_text("<html></html>")
    (project / "www" / "js" / "index.js").write_text("console.log('hi');")
    (project / "CordovaApp.jsproj").write_text(JSPROJ, encoding="utf-8")
    (project / "package.appxmanifest").write_text(LEGACY_MANIFEST, encoding="utf-8")
    return project


@pytest.fixture
def modern_project_dir(app_root: Path) -> Path:
    """Universal (.projitems) Windows project under app_root/platforms/windows."""
    project = app_root / "platforms" / "windows"
    (project / "www").mkdir(parents=True)
    (project / "www" / "index.html").write_text("<html></html>")
    (project / "CordovaApp.Shared.projitems").write_text(JSPROJ, encoding="utf-8")
    (project / "package.appxmanifest").write_text(LEGACY_MANIFEST, encoding="utf-8")
    return project
