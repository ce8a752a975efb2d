"""Application icon assets.

Submodules:
    icon_generator: Script to generate the application icon (run with python -m)

Asset Directory Structure:
    assets/
        icons/
            app_icon.png  - Application icon (256x256)
            app_icon.ico  - Windows application icon (multi-size), used by MainWindow
"""
