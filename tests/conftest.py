"""
Pytest configuration and fixtures for the preloader configurator tests.
"""

import os
import sys

import pytest

# Add the src directory to the Python path so the package imports without installing
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from xse_preloader_config.config.manager import SettingsManager
from xse_preloader_config.core.model import PreloaderConfig, ProcessRule


SAMPLE_XML = """<?xml version="1.0" encoding="utf-8" standalone="yes"?>
<xSE>
  <PluginPreloader>
    <OriginalLibrary>winhttp.dll</OriginalLibrary>
    <LoadMethod Name="ImportAddressHook">
      <ImportAddressHook>
        <LibraryName>kernel32.dll</LibraryName>
        <FunctionName>GetCommandLineA</FunctionName>
      </ImportAddressHook>
      <OnThreadAttach>
        <ThreadNumber>2</ThreadNumber>
      </OnThreadAttach>
      <OnProcessAttach/>
    </LoadMethod>
    <InstallExceptionHandler>true</InstallExceptionHandler>
    <KeepExceptionHandler>false</KeepExceptionHandler>
    <LoadDelay>100</LoadDelay>
    <HookDelay>250</HookDelay>
    <Processes>
      <!-- Processes the preloader may load into -->
      <Item Name="SkyrimSE.exe" Allow="true"/>
      <!-- Skyrim Special Edition -->
      <Item Name="skse64_loader.exe" Allow="true"/>
      <Item Name="SkyrimSELauncher.exe" Allow="false"/>
      <!-- Launcher, never hook -->
    </Processes>
  </PluginPreloader>
</xSE>
"""


@pytest.fixture
def sample_xml():
    """A complete preloader document with comments."""
    return SAMPLE_XML


@pytest.fixture
def sample_config():
    """Configuration equal to what SAMPLE_XML decodes to."""
    return PreloaderConfig(
        original_library="winhttp.dll",
        load_method_name="ImportAddressHook",
        import_library_name="kernel32.dll",
        import_function_name="GetCommandLineA",
        thread_number=2,
        install_exception_handler=True,
        keep_exception_handler=False,
        load_delay=100,
        hook_delay=250,
        processes=[
            ProcessRule(name="SkyrimSE.exe", allow=True, tooltip="Skyrim Special Edition"),
            ProcessRule(name="skse64_loader.exe", allow=True),
            ProcessRule(name="SkyrimSELauncher.exe", allow=False, tooltip="Launcher, never hook"),
        ],
    )


@pytest.fixture
def sample_file(tmp_path, sample_xml):
    """SAMPLE_XML written to a temporary file."""
    path = tmp_path / "xSE PluginPreloader.xml"
    path.write_text(sample_xml, encoding="utf-8")
    return path


@pytest.fixture
def settings_manager(tmp_path):
    """SettingsManager writing to a temporary settings file."""
    return SettingsManager(settings_path=tmp_path / "settings" / "settings.xml")
