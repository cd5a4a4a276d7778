"""racegate — dev launcher. Installs modules and starts the API in watch mode."""

import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path

from racegate.config import load_settings

ROOT = Path(__file__).parent
settings = load_settings(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
BACKEND_PORT = os.getenv("BACKEND_PORT", "13013")


def main():
    parser = argparse.ArgumentParser(description="racegate dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--install", action="store_true",
                        help="Install all available modules before starting")
    parser.add_argument("--uninstall", action="store_true",
                        help="Uninstall all available modules and exit")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.data_dir:
        settings.data_dir = args.data_dir

    if args.install or args.uninstall:
        from racegate.game import Game
        from racegate.modules import ModuleManager, available_modules
        from racegate.storage import Storage

        manager = ModuleManager(Game(Storage(settings.data_dir), settings=settings))
        modules = list(available_modules().values())
        if args.uninstall:
            for module in reversed(modules):
                manager.unregister(module)
            return
        for module in modules:
            manager.register(module)

    # Build env for the subprocess so the backend picks up the same data dir
    env = os.environ.copy()
    env["DATA_DIR"] = str(settings.data_dir.resolve())

    print(f"Starting backend on http://localhost:{BACKEND_PORT} ...")
    proc = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "backend.app:app", "--reload", "--host", HOST, "--port", BACKEND_PORT],
        cwd=ROOT, env=env,
    )
    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
        proc.terminate()
        proc.wait()


if __name__ == "__main__":
    main()
