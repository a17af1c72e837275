import logging

import pytest

from tscriptify import StructType, FieldDescriptor, Kind, TypeScriptGenerator, primitive
from tscriptify.logging_config import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installed so they never outlive captured streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def generator():
    """Generator with the default settings and no createFrom methods."""
    return TypeScriptGenerator({"create_from_method": False})


@pytest.fixture
def item_struct():
    """Hand-built struct with one string and one float field."""
    return StructType(
        name="Item",
        fields=[
            FieldDescriptor(name="Name", type=primitive(Kind.STRING), tag="name"),
            FieldDescriptor(name="Number", type=primitive(Kind.FLOAT64), tag="number"),
        ],
    )
