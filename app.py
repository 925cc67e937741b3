#!/usr/bin/env python3
"""
Landing CMS - Entry Point
===========================
One-command startup for the landing page content backend.

Usage:
    python app.py              # Start with default settings
    python app.py --port 9000  # Start on custom port
    PORT=9000 python app.py    # Same, via environment

This script:
    1. Loads environment variables from .env (PORT)
    2. Loads configuration from config.yaml
    3. Creates the FastAPI web application
    4. Starts the uvicorn server
"""

import os
import argparse
import logging
import uvicorn
from dotenv import load_dotenv


def main():
    """Parse arguments, load config, and start the web server."""

    # -- Parse command-line arguments ------------------------------------------
    parser = argparse.ArgumentParser(
        description="Landing CMS - content backend for a marketing landing page",
    )
    parser.add_argument(
        "--port", type=int, default=None,
        help="Port number (overrides PORT and config.yaml)",
    )
    parser.add_argument(
        "--host", type=str, default=None,
        help="Host binding address (overrides config.yaml)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    # -- Resolve project directory ---------------------------------------------
    project_dir = os.path.dirname(os.path.abspath(__file__))

    from landing.config import ConfigManager, DEFAULTS
    config_manager = ConfigManager(project_dir)

    # -- Ensure configuration file exists --------------------------------------
    config_path = config_manager.config_path
    config_example = os.path.join(project_dir, "config.yaml.example")
    if not os.path.exists(config_path) and os.path.exists(config_example):
        import shutil
        shutil.copy2(config_example, config_path)
        print(f"[INIT] Created config.yaml from template")

    # -- Load environment variables from .env ----------------------------------
    if os.path.exists(config_manager.env_path):
        load_dotenv(config_manager.env_path)

    # -- Load configuration to get web server settings -------------------------
    config = config_manager.load()

    if "_config_error" in config:
        print(f"[WARN] {config['_config_error']}")

    data_dir = config_manager.data_dir(config)
    if not os.path.exists(os.path.join(data_dir, "site.json")):
        print(f"[INIT] First run: site.json will be seeded in {data_dir}")

    # Command-line args override config file
    host = args.host or config["web"].get("host", DEFAULTS["web"]["host"])
    port = args.port or config["web"].get("port", DEFAULTS["web"]["port"])

    # -- Print startup banner --------------------------------------------------
    print()
    print(f"  Landing CMS : http://localhost:{port}")
    print(f"  Data        : {data_dir}")
    print()

    # -- Start the web server --------------------------------------------------
    uvicorn.run(
        "landing.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
