from rowdb.executor import Executor

exe = Executor(base_dir="data")

print("Creating database 'shop'")
print(exe.execute("CREATE DATABASE shop"))
print("Inserting rows")
print(exe.execute("INSERT INTO table VALUES (1, 'pen')"))
print(exe.execute("INSERT INTO table VALUES (2, 'paper')"))
print("Selecting id=1")
print(exe.execute("SELECT * FROM table WHERE id = 1"))
print("Renaming id=1")
print(exe.execute("UPDATE table SET name = 'marker' WHERE id = 1"))
print(exe.execute("SELECT * FROM table WHERE id = 1"))
print("Deleting id=2")
print(exe.execute("DELETE FROM table WHERE id = 2"))
print("Final rows")
print(exe.execute("SELECT * FROM table"))
exe.shutdown()
