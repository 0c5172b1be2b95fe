import argparse
import logging
import os
import sys

from .exceptions import RowDBException
from .executor import Executor

BANNER = """rowdb REPL. Commands:
  CREATE DATABASE dbname
  USE dbname
  SHOW DATABASES
  DROP DATABASE dbname
  INSERT INTO table VALUES (1, 'name')
  SELECT * FROM table WHERE id = 1
  SELECT * FROM table
  UPDATE table SET name = 'newname' WHERE id = 1
  DELETE FROM table WHERE id = 1
  EXIT to quit"""


def prompt_for(exe: Executor) -> str:
    name = exe.catalog.current_name
    return f"{name}> " if name else "No DB> "


def repl_loop(base_dir: str = "data"):
    exe = Executor(base_dir=base_dir)
    print(BANNER)
    try:
        while True:
            try:
                line = input(prompt_for(exe))
            except EOFError:
                print()
                break
            if line == "EXIT":
                break
            try:
                res = exe.execute(line)
            except RowDBException as e:
                print(f"Error: {e}", file=sys.stderr)
                continue
            if res is not None:
                print(res)
    finally:
        exe.shutdown()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="rowdb", description="Command-driven row store")
    ap.add_argument("--data-dir", default=os.environ.get("ROWDB_DATA_DIR", "data"),
                    help="directory holding <name>.dat store files")
    ap.add_argument("--log-level", default=os.environ.get("ROWDB_LOG_LEVEL", "WARNING"),
                    help="logging level (DEBUG, INFO, WARNING, ...)")
    args = ap.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s [%(levelname)s] %(message)s")
    try:
        repl_loop(base_dir=args.data_dir)
    except RowDBException as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
