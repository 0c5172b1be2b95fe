import atexit
import os
import threading

from flask import Flask, jsonify, redirect, render_template_string, request, url_for

from .exceptions import RowDBException
from .executor import Executor

INDEX_HTML = """
<!doctype html>
<html>
<head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1">
        <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css" rel="stylesheet">
        <title>rowdb console</title>
        <style>body { background:#f8f9fa }</style>
</head>
<body>
<nav class="navbar navbar-dark bg-dark mb-3">
    <div class="container">
        <span class="navbar-brand">rowdb</span>
        <span class="navbar-text">{{ current or 'No DB' }}</span>
    </div>
</nav>
<div class="container py-4">
        <div class="card mb-4">
            <div class="card-body">
                <h4 class="card-title">Console</h4>
                <form method="post" action="{{ url_for('execute') }}">
                        <div class="mb-3">
                                <input name="command" class="form-control" value="{{ command }}" autofocus>
                        </div>
                        <button class="btn btn-primary" type="submit">Execute</button>
                </form>
            </div>
        </div>
        {% if error %}
            <div class="alert alert-danger">Error: {{ error }}</div>
        {% elif output %}
            <pre class="bg-light p-3">{{ output }}</pre>
        {% endif %}
        <h3>Databases</h3>
        <div class="list-group">
        {% for name, is_current in databases %}
                <div class="list-group-item">{{ name }}{% if is_current %} <span class="badge bg-primary">current</span>{% endif %}</div>
        {% else %}
                <div class="list-group-item text-muted">none</div>
        {% endfor %}
        </div>
</div>
</body>
</html>
"""


def create_app(data_dir=None, executor=None, shutdown_at_exit=True):
    """Build the console app around one Executor.

    Commands run one at a time; the dev server may handle requests on
    several threads. With `shutdown_at_exit` the executor's stores are
    persisted when the interpreter exits, whichever server runs the app.
    """
    app = Flask(__name__)
    exe = executor or Executor(base_dir=data_dir or os.environ.get("ROWDB_DATA_DIR", "data"))
    lock = threading.Lock()
    app.config["EXECUTOR"] = exe
    if shutdown_at_exit:
        atexit.register(exe.shutdown)

    def render(command="", output=None, error=None, status=200):
        page = render_template_string(
            INDEX_HTML,
            command=command,
            output=output,
            error=error,
            current=exe.catalog.current_name,
            databases=exe.catalog.list(),
        )
        return page, status

    @app.route("/", methods=["GET"])
    def index():
        return render()

    @app.route("/execute", methods=["POST"])
    def execute():
        command = request.form.get("command", "")
        if not command.strip():
            return redirect(url_for("index"))
        with lock:
            try:
                output = exe.execute(command)
            except RowDBException as e:
                return render(command=command, error=str(e), status=400)
        return render(command=command, output=output)

    @app.route("/databases", methods=["GET"])
    def databases():
        with lock:
            return jsonify({
                "current": exe.catalog.current_name,
                "databases": [name for name, _ in exe.catalog.list()],
            })

    @app.route("/rows", methods=["GET"])
    def rows():
        with lock:
            table = exe.catalog.current
            if table is None:
                return jsonify({"error": "No database selected"}), 409
            cols = [c.name for c in table.schema]
            return jsonify({
                "database": table.name,
                "columns": cols,
                "rows": [dict(zip(cols, r)) for r in table.scan()],
            })

    return app


if __name__ == "__main__":
    create_app().run(port=5000)
