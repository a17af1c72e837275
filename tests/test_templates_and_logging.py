"""Tests for the template engine and logging setup."""

import io
import logging

import pytest

from tscriptify import TypeScriptGenerator
from tscriptify.codegen.core.templates import TemplateError, create_template_engine
from tscriptify.logging_config import ROOT_LOGGER_NAME, configure_logging, get_logger
from sample_types import Dummy


class TestTemplateEngine:
    """Test the Jinja2 wrapper."""

    def test_render_string_with_filters(self):
        engine = create_template_engine()
        assert engine.render_string("{{ v | camel }}", {"v": "dark_blue"}) == "DarkBlue"
        assert engine.render_string("{{ v | comment }}", {"v": "a\n\nb"}) == "// a\n\n// b"

    def test_undefined_variables_fail(self):
        with pytest.raises(TemplateError):
            create_template_engine().render_string("{{ missing }}", {})

    def test_in_memory_templates(self):
        engine = create_template_engine()
        engine.add_template("hello.j2", "hello {{ name }}")
        assert engine.template_exists("hello.j2")
        assert engine.render_template("hello.j2", {"name": "ts"}) == "hello ts"

    def test_generator_ships_its_block_template(self):
        generator = TypeScriptGenerator()
        assert generator.template_exists("block.ts.j2")
        assert not generator.template_exists("missing.ts.j2")


class TestLogging:
    """Test logging configuration."""

    def test_configure_is_idempotent(self):
        stream = io.StringIO()
        configure_logging("INFO", stream=stream)
        logger = configure_logging("DEBUG", stream=stream)
        logger.debug("hello")

        own_handlers = [
            h for h in logger.handlers if type(h).__name__ == "_TscriptifyHandler"
        ]
        assert len(own_handlers) == 1
        assert logger.level == logging.DEBUG
        assert "DEBUG    | tscriptify | hello" in stream.getvalue()

    def test_default_logger_is_the_package_logger(self):
        assert get_logger().name == ROOT_LOGGER_NAME

    def test_conversion_logs_emitted_blocks(self, caplog):
        caplog.set_level(logging.DEBUG, logger=ROOT_LOGGER_NAME)
        generator = TypeScriptGenerator()
        generator.add_type(Dummy)

        generator.convert()

        assert "Registered root type Dummy" in caplog.text
        assert "Emitted class Dummy with 2 field(s)" in caplog.text
