"""Allow running the configurator with ``python -m xse_preloader_config``."""

from .app import main

main()
