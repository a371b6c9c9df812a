from flask import Flask, render_template
import logging
import socket

logger = logging.getLogger(__name__)

DEFAULT_STACK_FILE = "/var/www/html/stack.txt"

# Any method gets the page, OPTIONS included.
PAGE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class HostnameUnavailable(OSError):
    """The platform could not supply a hostname for this machine."""


def get_hostname():
    try:
        hostname = socket.gethostname()
    except OSError as e:
        raise HostnameUnavailable(f"hostname lookup failed: {e}") from e
    if not hostname:
        raise HostnameUnavailable("hostname lookup returned an empty name")
    return hostname


def read_stack_name(path):
    """Return the stripped stack label stored at ``path``.

    A missing, empty or unreadable file all mean "no label" and give None.
    """
    try:
        with open(path, encoding="utf-8") as f:
            stack_name = f.read().strip()
    except FileNotFoundError:
        logger.debug("No stack file at %s", path)
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable stack file %s: %s", path, e)
        return None
    return stack_name or None


def render_page(hostname, stack_name=None):
    return render_template("index.html", hostname=hostname, stack_name=stack_name)


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_mapping(
        STACK_FILE=DEFAULT_STACK_FILE,
        SHOW_STACK_LABEL=True,
    )
    app.config.from_prefixed_env("HOSTNAME_VIEWER")
    if test_config is not None:
        app.config.from_mapping(test_config)

    @app.route("/", methods=PAGE_METHODS, provide_automatic_options=False)
    def index():
        current_hostname = get_hostname()
        stack_name = None
        if app.config["SHOW_STACK_LABEL"]:
            stack_name = read_stack_name(app.config["STACK_FILE"])
        return render_page(current_hostname, stack_name)

    @app.get("/healthz")
    def healthz():
        return "ok", 200

    @app.errorhandler(HostnameUnavailable)
    def hostname_unavailable(e):
        logger.error("Cannot render page: %s", e)
        return "Internal Server Error", 500, {"Content-Type": "text/plain; charset=utf-8"}

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.run(host="0.0.0.0", port=5000)
