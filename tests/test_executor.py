import pytest

from rowdb.exceptions import (
    DuplicateKey,
    KeyNotFound,
    NoSelection,
    SchemaMismatch,
    StoreAlreadyExists,
    StoreNotFound,
    SyntaxErrorRDB,
    UnknownCommand,
)
from rowdb.executor import Executor


def test_blank_line_is_noop(exe):
    assert exe.execute("") is None
    assert exe.catalog.list() == []


def test_scenario_insert_then_select(exe):
    assert exe.execute("CREATE DATABASE shop") == "Database 'shop' created and selected"
    assert exe.execute("INSERT INTO table VALUES (1, 'pen')") == "Inserted successfully into 'shop'"
    assert exe.execute("SELECT * FROM table WHERE id = 1") == "1, pen"


def test_scenario_duplicate_insert(exe):
    exe.execute("CREATE DATABASE shop")
    exe.execute("INSERT INTO table VALUES (1, 'pen')")
    with pytest.raises(DuplicateKey):
        exe.execute("INSERT INTO table VALUES (1, 'pencil')")
    assert exe.execute("SELECT * FROM table WHERE id = 1") == "1, pen"


def test_scenario_update(exe):
    exe.execute("CREATE DATABASE shop")
    exe.execute("INSERT INTO table VALUES (1, 'pen')")
    assert exe.execute("UPDATE table SET name = 'marker' WHERE id = 1") == "Updated successfully in 'shop'"
    assert exe.execute("SELECT * FROM table WHERE id = 1") == "1, marker"
    assert exe.catalog.current.select_by_index("marker") == [(1, "marker")]


def test_scenario_delete(exe):
    exe.execute("CREATE DATABASE shop")
    exe.execute("INSERT INTO table VALUES (1, 'pen')")
    assert exe.execute("DELETE FROM table WHERE id = 1") == "Deleted successfully from 'shop'"
    with pytest.raises(KeyNotFound):
        exe.execute("SELECT * FROM table WHERE id = 1")
    # deleting again is not an error
    assert exe.execute("DELETE FROM table WHERE id = 1") == "Deleted successfully from 'shop'"


def test_scenario_show_databases(exe):
    exe.execute("CREATE DATABASE shop")
    exe.execute("CREATE DATABASE office")
    out = exe.execute("SHOW DATABASES")
    assert out.splitlines() == ["Databases:", "  shop", "  office (current)"]


def test_update_missing_row(exe):
    exe.execute("CREATE DATABASE shop")
    with pytest.raises(KeyNotFound):
        exe.execute("UPDATE table SET name = 'x' WHERE id = 9")


def test_use_switches(exe):
    exe.execute("CREATE DATABASE shop")
    exe.execute("INSERT INTO table VALUES (1, 'pen')")
    exe.execute("CREATE DATABASE office")
    with pytest.raises(KeyNotFound):
        exe.execute("SELECT * FROM table WHERE id = 1")
    assert exe.execute("USE shop") == "Switched to database 'shop'"
    assert exe.execute("SELECT * FROM table WHERE id = 1") == "1, pen"
    with pytest.raises(StoreNotFound):
        exe.execute("USE garage")


def test_create_existing(exe):
    exe.execute("CREATE DATABASE shop")
    with pytest.raises(StoreAlreadyExists):
        exe.execute("CREATE DATABASE shop")


def test_drop(exe):
    exe.execute("CREATE DATABASE shop")
    exe.execute("CREATE DATABASE office")
    assert exe.execute("DROP DATABASE shop") == "Database 'shop' dropped"
    assert exe.execute("DROP DATABASE office") == "Database 'office' dropped. No database selected."
    with pytest.raises(NoSelection):
        exe.execute("SELECT * FROM table WHERE id = 1")
    with pytest.raises(StoreNotFound):
        exe.execute("DROP DATABASE office")


@pytest.mark.parametrize("line", [
    "INSERT INTO table VALUES (1, 'pen')",
    "SELECT * FROM table WHERE id = 1",
    "SELECT * FROM table",
    "UPDATE table SET name = 'x' WHERE id = 1",
    "DELETE FROM table WHERE id = 1",
])
def test_row_commands_need_selection(exe, line):
    with pytest.raises(NoSelection):
        exe.execute(line)


def test_select_all(exe):
    exe.execute("CREATE DATABASE shop")
    assert exe.execute("SELECT * FROM table") == "(empty)"
    exe.execute("INSERT INTO table VALUES (2, 'cup')")
    exe.execute("INSERT INTO table VALUES (1, 'pen')")
    assert exe.execute("SELECT * FROM table") == "1, pen\n2, cup"


def test_integer_out_of_range(exe):
    exe.execute("CREATE DATABASE shop")
    with pytest.raises(SchemaMismatch):
        exe.execute("INSERT INTO table VALUES (99999999999, 'big')")


def test_errors_do_not_break_later_commands(exe):
    with pytest.raises(UnknownCommand):
        exe.execute("EXPLODE")
    with pytest.raises(SyntaxErrorRDB):
        exe.execute("CREATE DATABASE")
    assert exe.execute("CREATE DATABASE shop") == "Database 'shop' created and selected"


def test_data_survives_restart(data_dir):
    first = Executor(base_dir=str(data_dir))
    first.execute("CREATE DATABASE shop")
    first.execute("INSERT INTO table VALUES (1, 'pen')")
    first.execute("INSERT INTO table VALUES (2, 'cup')")
    first.shutdown()

    second = Executor(base_dir=str(data_dir))
    second.execute("CREATE DATABASE shop")
    assert second.execute("SELECT * FROM table") == "1, pen\n2, cup"
    assert second.catalog.current.select_by_index("cup") == [(2, "cup")]


def test_huge_integer_in_insert(exe):
    exe.execute("CREATE DATABASE shop")
    with pytest.raises(SchemaMismatch):
        exe.execute("INSERT INTO table VALUES (" + "9" * 5000 + ", 'x')")
    assert exe.execute("SELECT * FROM table") == "(empty)"


@pytest.mark.parametrize("line", [
    "SELECT * FROM table WHERE id = {}",
    "DELETE FROM table WHERE id = {}",
    "UPDATE table SET name = 'x' WHERE id = {}",
])
def test_huge_integer_in_where(exe, line):
    exe.execute("CREATE DATABASE shop")
    with pytest.raises(SchemaMismatch):
        exe.execute(line.format("9" * 5000))


def test_leading_zeros_do_not_count(exe):
    exe.execute("CREATE DATABASE shop")
    exe.execute("INSERT INTO table VALUES (" + "0" * 20 + "7, 'pen')")
    assert exe.execute("SELECT * FROM table WHERE id = 7") == "7, pen"


def test_eleven_digit_key_is_out_of_range(exe):
    exe.execute("CREATE DATABASE shop")
    with pytest.raises(SchemaMismatch):
        exe.execute("SELECT * FROM table WHERE id = 10000000000")
