import pytest

from rowdb.catalog import Catalog
from rowdb.executor import Executor
from rowdb.storage import Table
from rowdb.types import DEFAULT_SCHEMA


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def table(data_dir):
    return Table("shop", DEFAULT_SCHEMA, path=str(data_dir / "shop.dat"))


@pytest.fixture
def catalog(data_dir):
    return Catalog(base_dir=str(data_dir))


@pytest.fixture
def exe(data_dir):
    return Executor(base_dir=str(data_dir))
