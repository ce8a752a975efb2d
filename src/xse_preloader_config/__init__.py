"""xSE Preloader Configurator - Editor for the xSE PluginPreloader XML settings file.

This application provides:
    - Opening an existing "xSE PluginPreloader.xml" configuration
    - Editing the wrapped library, load method, delays and exception handler flags
    - Managing the per-process allow/deny rules (with optional tooltip comments)
    - Saving the result back to disk in the same schema

The application uses CustomTkinter for the GUI and stores its own preferences
in %APPDATA%/PreloaderConfigurator.

Package Structure:
    app: Main application entry point and orchestrator
    errors: Exception hierarchy shared by the codec, document and GUI
    config: Application settings, paths and path validation
    core: Preloader data model, XML codec and the editing document
    gui: User interface components (main window, dialogs, widgets)
    assets: Icons and asset loading utilities

Quick Start:
    Run from command line::

        xse-preloader-config [path/to/xSE PluginPreloader.xml]

    Or use the codec programmatically::

        from xse_preloader_config.core import decode, encode
        config = decode(xml_text)
        xml_text = encode(config)

Configuration:
    - Settings file: %APPDATA%/PreloaderConfigurator/settings.xml
    - Log file: %APPDATA%/PreloaderConfigurator/preloader_config.log
"""

__version__ = "1.0.0"
__app_name__ = "xSE Preloader Configurator"
