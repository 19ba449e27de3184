from pathlib import Path

import pytest

from json_schema_to_cpp.pipeline import Driver, GeneratorConfig
from json_schema_to_cpp.reader import ExtensionReaderContext

TEST_DATA = Path(__file__).parent / "test_data"
SCHEMAS = TEST_DATA / "schemas"
NAMESPACE = "Sample"


@pytest.fixture
def config():
    return GeneratorConfig.from_file(TEST_DATA / "config.json")


@pytest.fixture
def driver(config):
    return Driver(config, NAMESPACE, base_dir=TEST_DATA)


@pytest.fixture
def result(driver):
    return driver.generate([SCHEMAS / "node.json"])


@pytest.fixture
def reader_context(result):
    return ExtensionReaderContext.from_result(result)
