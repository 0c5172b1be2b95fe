"""Small example driving a store directly: catalog, insert, index lookup, persistence."""
from rowdb.catalog import Catalog
from rowdb.types import DEFAULT_SCHEMA


def bootstrap():
    cat = Catalog(base_dir="data")
    users = cat.create_store("users", DEFAULT_SCHEMA)
    print("Inserting rows...")
    for row in [(1, "alice"), (2, "bob"), (3, "alice")]:
        if row[0] not in users:
            users.insert(row)
    print("All rows:")
    for r in users.scan():
        print(r)
    print("Rows named 'alice':")
    for r in users.select_by_index("alice"):
        print(r)
    cat.shutdown()


if __name__ == "__main__":
    bootstrap()
