"""HTTP relay that lets browser code reach local-only resources.

A browser cannot spawn the agent CLIs or always reach a local Ollama server,
so this small Flask app does it on the caller's behalf.

Usage:
    wanderword-relay
    wanderword-relay --port 3001 --host 0.0.0.0

Routes:
    POST /backend-call           {model, prompt, timeout} -> {output}
    GET  /backend-availability   -> {agents: [{name, installed}]}
    GET  /local-model-list       ?baseUrl=... -> {models: [...]}
"""

import argparse
import logging
from typing import Optional

import requests
from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS

from wanderword.backend_detect import detect_cli_agents
from wanderword.cli_agents import find_cli_caller, run_cli_agent
from wanderword.errors import BackendTimeoutError, UpstreamError
from wanderword.log_utils import configure_logging
from wanderword.providers import DEFAULT_OLLAMA_URL, cli_agent_names
from wanderword.settings import Settings, get_settings

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3001


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create the relay application."""
    settings = settings or get_settings()
    app = Flask(__name__)
    CORS(app)  # Browser front end runs on another origin

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"}), 200

    @app.route("/backend-availability", methods=["GET"])
    def backend_availability():
        return jsonify({"agents": detect_cli_agents()}), 200

    @app.route("/local-model-list", methods=["GET"])
    def local_model_list():
        base_url = (request.args.get("baseUrl") or DEFAULT_OLLAMA_URL).rstrip("/")
        try:
            response = requests.get(f"{base_url}/api/tags", timeout=10)
            if not response.ok:
                raise requests.exceptions.HTTPError(f"Ollama returned {response.status_code}")
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"[OLLAMA] model list from {base_url} failed: {e}")
            return jsonify({"error": "Ollama not available", "message": str(e), "models": []}), 503
        return jsonify(data), 200

    @app.route("/backend-call", methods=["POST"])
    def backend_call():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return jsonify({"error": "Request body must be a JSON object", "output": ""}), 400

        model = body.get("model")
        prompt = body.get("prompt")
        timeout = body.get("timeout", 60)
        if model not in cli_agent_names():
            valid = ", ".join(cli_agent_names())
            return jsonify({"error": f"Unknown model: {model}. Use one of: {valid}", "output": ""}), 400
        if not isinstance(prompt, str) or not prompt:
            return jsonify({"error": "prompt is required", "output": ""}), 400
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            return jsonify({"error": "timeout must be a positive number", "output": ""}), 400

        logger.info(f"Request: model={model}, timeout={timeout}")
        cli_caller = find_cli_caller(settings.get("cli_caller"))
        try:
            result = run_cli_agent(model, prompt, timeout, cli_caller)
        except BackendTimeoutError as e:
            logger.error(f"[CLI] {e}")
            return jsonify({"error": str(e), "output": ""}), 504
        except UpstreamError as e:
            logger.error(f"[CLI] {e}")
            return jsonify({"error": str(e), "output": ""}), 500

        if result.succeeded:
            return jsonify({"output": result.stdout or result.stderr}), 200

        logger.error(f"[CLI] Exit code: {result.returncode}, stderr: {result.stderr.strip()}")
        return jsonify({
            "error": f"Process exited with code {result.returncode}",
            "output": result.stderr,
        }), 500

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    return app


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the relay server."""
    load_dotenv()
    settings = get_settings()

    parser = argparse.ArgumentParser(description="WanderWord relay for local CLI agents and Ollama")
    parser.add_argument("--host", default=settings.get("relay_host"), help="Bind address")
    parser.add_argument(
        "--port", "-p", type=int, default=settings.get("relay_port", DEFAULT_PORT), help="Port"
    )
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    args = parser.parse_args(argv)

    log_file = configure_logging()

    app = create_app(settings)
    caller = find_cli_caller(settings.get("cli_caller"))
    logger.info(f"WanderWord relay running on http://{args.host}:{args.port}")
    logger.info(f"CLI caller: {caller or 'direct agent invocation'}")
    logger.info(f"Debug log: {log_file}")
    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True, use_reloader=False)


if __name__ == "__main__":
    main()
