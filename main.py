# main.py
import logging

from flask import Flask, request, jsonify

import config
import db_repo
from db_repo import DatabaseAccessError
from models import STATUS_OK, STATUS_REJECTED
from table_info import get_table_info

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
LOG = logging.getLogger(__name__)

app = Flask(__name__)


def _command_text():
    # query string first (?commandText=...), then form or JSON body
    text = request.args.get("commandText")
    if text is None:
        text = request.form.get("commandText")
    if text is None:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            text = body.get("commandText")
    return text


def _execution_response(result):
    if result.status == STATUS_OK:
        code = 200
    elif result.status == STATUS_REJECTED:
        code = 400
    else:
        code = 500
    return jsonify(result.to_dict()), code


@app.errorhandler(DatabaseAccessError)
def database_access_error(e):
    return jsonify({"error": str(e)}), 500


@app.route("/health")
def health():
    return jsonify({"status": "ok"})


@app.route("/api/command/get-db-status", methods=["GET"])
def get_db_status():
    status = db_repo.get_db_status()
    code = 200 if status.query_status and status.query_status.is_success else 500
    return jsonify(status.to_dict()), code


@app.route("/api/executor/get-db-status", methods=["GET"])
def executor_get_db_status():
    status = db_repo.get_db_status()
    code = 200 if status.query_status and status.query_status.is_success else 500
    return jsonify(status.to_dict(include_query_status=False)), code


@app.route("/api/command/list-all-table", methods=["GET"])
def list_all_table():
    return jsonify(db_repo.list_all_tables())


@app.route("/api/command/get-table-info", methods=["GET"])
def table_info():
    table_name = request.args.get("tableName")
    if not table_name:
        return jsonify({"error": "tableName required"}), 400
    try:
        info = get_table_info(table_name)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    if info is None:
        return jsonify({"error": f"table '{table_name}' not found"}), 404
    return jsonify(info.to_dict())


@app.route("/api/command/show-grants", methods=["GET"])
def show_grants():
    return jsonify(db_repo.show_grants())


@app.route("/api/command/execute-write-command", methods=["POST"])
def execute_write_command():
    return _execution_response(db_repo.execute_write_command(_command_text()))


@app.route("/api/command/execute-read-command", methods=["POST"])
def execute_read_command():
    return _execution_response(db_repo.execute_read_command(_command_text()))


if __name__ == "__main__":
    LOG.info("Registered routes:")
    for r in sorted([rule.rule for rule in app.url_map.iter_rules()]):
        LOG.info("  %s", r)
    app.run(host="0.0.0.0", port=config.PORT)
