"""ulidkit HTTP service - Entry Point."""

from ulidkit.config import load_config
from ulidkit.utils.crash import configure as configure_crash, install_crash_handler

config = load_config()
configure_crash(config.logging.crash_file)
install_crash_handler()

from ulidkit.service.app import create_app  # noqa: E402

app = create_app(config)


def main():
    import uvicorn
    uvicorn.run("ulidkit.server:app", host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
