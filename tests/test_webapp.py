import pytest

from rowdb.webapp import create_app


@pytest.fixture
def client(data_dir):
    app = create_app(data_dir=str(data_dir), shutdown_at_exit=False)
    app.config["TESTING"] = True
    return app.test_client()


def run(client, command):
    return client.post("/execute", data={"command": command})


def test_index(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"No DB" in resp.data


def test_execute_and_list(client):
    resp = run(client, "CREATE DATABASE shop")
    assert resp.status_code == 200
    assert b"created and selected" in resp.data
    run(client, "INSERT INTO table VALUES (1, 'pen')")
    resp = run(client, "SELECT * FROM table WHERE id = 1")
    assert b"1, pen" in resp.data

    assert client.get("/databases").get_json() == {"current": "shop", "databases": ["shop"]}
    body = client.get("/rows").get_json()
    assert body["columns"] == ["id", "name"]
    assert body["rows"] == [{"id": 1, "name": "pen"}]


def test_execute_error(client):
    resp = run(client, "SELECT * FROM table WHERE id = 1")
    assert resp.status_code == 400
    assert b"No database selected" in resp.data


def test_blank_command_redirects(client):
    resp = run(client, "  ")
    assert resp.status_code == 302


def test_rows_without_selection(client):
    resp = client.get("/rows")
    assert resp.status_code == 409


def test_stores_persist_at_exit(monkeypatch, data_dir):
    registered = []
    monkeypatch.setattr("rowdb.webapp.atexit.register", registered.append)
    app = create_app(data_dir=str(data_dir))
    app.test_client().post("/execute", data={"command": "CREATE DATABASE shop"})
    assert len(registered) == 1
    registered[0]()
    assert (data_dir / "shop.dat").exists()


def test_no_exit_hook_when_disabled(monkeypatch, data_dir):
    registered = []
    monkeypatch.setattr("rowdb.webapp.atexit.register", registered.append)
    create_app(data_dir=str(data_dir), shutdown_at_exit=False)
    assert registered == []


def test_name_outside_data_dir_rejected(client, data_dir):
    resp = run(client, "CREATE DATABASE ../escaped")
    assert resp.status_code == 400
    assert not (data_dir.parent / "escaped.dat").exists()
