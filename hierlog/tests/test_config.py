"""
Unit tests for configuration: LoggerConfig (env), configure(), configure_from_dict().
"""
from __future__ import annotations

import io
import os
import tempfile
import unittest
from unittest.mock import patch

import hierlog
from hierlog.config import LoggerConfig
from hierlog.core import system as system_module
from hierlog.core.exceptions import ConfigurationError, UnknownLevelError
from hierlog.core.system import LoggingSystem, init_logging
from hierlog.formatting.formatters import JsonFormatter
from hierlog.handlers.base import BaseHandler
from hierlog.handlers.console import ConsoleHandler
from hierlog.handlers.file import FileHandler
from hierlog.setup import configure, configure_from_dict, get_logger, is_configured, logger_for


class _NullHandler(BaseHandler):
    def emit(self, context) -> None:
        pass


class TestLoggerConfigFromEnv(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self) -> None:
        config = LoggerConfig.from_env()
        self.assertEqual(config.level, "INFO")
        self.assertTrue(config.console)
        self.assertTrue(config.color)
        self.assertEqual(config.stream, "stdout")
        self.assertIsNone(config.log_file)
        self.assertIsNone(config.silence)

    @patch.dict(
        os.environ,
        {
            "LOG_LEVEL": "debug",
            "LOG_CONSOLE": "no",
            "LOG_COLOR": "0",
            "LOG_STREAM": "STDERR",
            "LOG_FILE": "/tmp/app.log",
            "LOG_FILE_LEVEL": "warn",
            "LOG_FILE_FORMAT": "json",
            "LOG_SILENCE": "console",
        },
        clear=True,
    )
    def test_reads_env(self) -> None:
        config = LoggerConfig.from_env()
        self.assertEqual(config.level, "DEBUG")
        self.assertFalse(config.console)
        self.assertFalse(config.color)
        self.assertEqual(config.stream, "stderr")
        self.assertEqual(config.log_file, "/tmp/app.log")
        self.assertEqual(config.file_level, "WARN")
        self.assertEqual(config.file_format, "json")
        self.assertEqual(config.silence, "console")

    @patch.dict(os.environ, {"LOG_LEVEL": "ERROR"}, clear=True)
    def test_overrides_win(self) -> None:
        self.assertEqual(LoggerConfig.from_env(level="TRACE").level, "TRACE")

    @patch.dict(os.environ, {"LOG_CONSOLE": "maybe"}, clear=True)
    def test_bad_bool(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            LoggerConfig.from_env()
        self.assertEqual(ctx.exception.details["variable"], "LOG_CONSOLE")

    def test_bad_choices(self) -> None:
        with self.assertRaises(ConfigurationError):
            LoggerConfig(stream="printer")
        with self.assertRaises(ConfigurationError):
            LoggerConfig(file_format="xml")
        with self.assertRaises(ConfigurationError):
            LoggerConfig(silence="some")

    def test_with_overrides_revalidates(self) -> None:
        config = LoggerConfig()
        self.assertEqual(config.with_overrides(level="warn").level, "WARN")
        with self.assertRaises(ConfigurationError):
            config.with_overrides(stream="nowhere")


class TestConfigure(unittest.TestCase):
    def setUp(self) -> None:
        self.system = LoggingSystem()
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        for handler in self.system.root.handlers:
            if isinstance(handler, FileHandler):
                handler.close()
        self.tmp.cleanup()

    def test_console_and_json_file(self) -> None:
        path = os.path.join(self.tmp.name, "app.log")
        config = LoggerConfig(level="DEBUG", log_file=path, file_format="json", color=False)
        configure(config, system=self.system)
        root = self.system.root
        self.assertEqual(root.level, "DEBUG")
        console, file_handler = root.handlers
        self.assertIsInstance(console, ConsoleHandler)
        self.assertEqual(console.level, "INFO")
        self.assertIsInstance(file_handler, FileHandler)
        self.assertIsInstance(file_handler.formatter, JsonFormatter)

    def test_reconfigure_replaces_handlers(self) -> None:
        configure(LoggerConfig(), system=self.system)
        configure(LoggerConfig(), system=self.system)
        self.assertEqual(len(self.system.root.handlers), 1)

    def test_reconfigure_keeps_handlers_attached_by_hand(self) -> None:
        own = _NullHandler(system=self.system)
        self.system.root.add_handler(own)
        configure(LoggerConfig(), system=self.system)
        configure(LoggerConfig(), system=self.system)
        handlers = self.system.root.handlers
        self.assertIs(handlers[0], own)
        self.assertEqual(len(handlers), 2)
        self.assertIsInstance(handlers[1], ConsoleHandler)

    def test_no_console(self) -> None:
        configure(LoggerConfig(console=False), system=self.system)
        self.assertEqual(self.system.root.handlers, [])

    def test_silence_mode(self) -> None:
        configure(LoggerConfig(silence="all"), system=self.system)
        self.assertTrue(self.system.silenced_all)
        configure(LoggerConfig(silence="none"), system=self.system)
        self.assertFalse(self.system.silenced_all)

    def test_unset_silence_leaves_flags(self) -> None:
        self.system.silence()
        configure(LoggerConfig(), system=self.system)
        self.assertTrue(self.system.silenced_all)

    def test_marks_system_configured(self) -> None:
        self.assertFalse(is_configured(self.system))
        configure(LoggerConfig(console=False), system=self.system)
        self.assertTrue(is_configured(self.system))

    def test_unknown_level_for_system(self) -> None:
        custom = LoggingSystem(["low", "high"])
        with self.assertRaises(UnknownLevelError):
            configure(LoggerConfig(level="INFO", console=False), system=custom)


class TestConfigureFromDict(unittest.TestCase):
    def setUp(self) -> None:
        self.system = LoggingSystem()

    def test_full_config(self) -> None:
        stream = io.StringIO()
        configure_from_dict(
            {
                "handlers": {
                    "out": {"type": "console", "level": "DEBUG", "format": "{logger} {message}", "stream": stream},
                    "quiet": {"type": "console", "silenced": True, "stream": stream},
                },
                "root": {"level": "INFO", "handlers": ["out"]},
                "loggers": {
                    "db": {"level": "WARN", "extra": {"component": "db"}},
                    "db.pool": {"propagate": False, "handlers": ["quiet"]},
                },
            },
            system=self.system,
        )
        self.assertEqual(self.system.root.level, "INFO")
        self.assertEqual(self.system.get_logger("db").level, "WARN")
        self.assertFalse(self.system.get_logger("db.pool").propagate)
        self.assertTrue(self.system.get_logger("db.pool").handlers[0].silenced)

        self.system.get_logger("db").warn("slow query")
        self.system.get_logger("db").info("dropped")
        self.system.get_logger("db.pool").error("not routed to root")
        self.assertEqual(stream.getvalue(), "db slow query\n")

    def test_unset_fields_left_alone(self) -> None:
        logger = self.system.get_logger("svc")
        logger.level = "ERROR"
        configure_from_dict({"loggers": {"svc": {"propagate": False}}}, system=self.system)
        self.assertEqual(logger.level, "ERROR")

    def test_schema_violation(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            configure_from_dict({"handlers": {"h": {"level": "INFO"}}}, system=self.system)
        self.assertTrue(ctx.exception.details["errors"])

    def test_unknown_top_level_key(self) -> None:
        with self.assertRaises(ConfigurationError):
            configure_from_dict({"formatters": {}}, system=self.system)

    def test_undeclared_handler_reference(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            configure_from_dict({"root": {"handlers": ["missing"]}}, system=self.system)
        self.assertEqual(ctx.exception.details["handlers"], ["missing"])

    def test_unknown_handler_type(self) -> None:
        with self.assertRaises(ConfigurationError):
            configure_from_dict({"handlers": {"h": {"type": "syslog"}}}, system=self.system)

    def test_unknown_logger_level(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            configure_from_dict({"loggers": {"svc": {"level": "LOUD"}}}, system=self.system)
        self.assertEqual(ctx.exception.details["logger"], "svc")

    def test_unknown_handler_level(self) -> None:
        with self.assertRaises(ConfigurationError):
            configure_from_dict({"handlers": {"h": {"type": "console", "level": "LOUD"}}}, system=self.system)

    def test_marks_system_configured(self) -> None:
        configure_from_dict({}, system=self.system)
        self.assertTrue(is_configured(self.system))

    def test_global_silence(self) -> None:
        configure_from_dict({"silence": "console"}, system=self.system)
        self.assertTrue(self.system.silenced_console)




class TestAutoConfigure(unittest.TestCase):
    def setUp(self) -> None:
        self._saved_system = system_module._system
        system_module._system = LoggingSystem()

    def tearDown(self) -> None:
        system_module._system = self._saved_system

    @patch.dict(os.environ, {"LOG_LEVEL": "WARN"}, clear=True)
    def test_get_logger_configures_from_env_once(self) -> None:
        logger = get_logger("auto")
        root = system_module._system.root
        self.assertEqual(root.level, "WARN")
        self.assertEqual(len(root.handlers), 1)
        self.assertIs(get_logger("auto"), logger)
        self.assertEqual(len(root.handlers), 1)

    @patch.dict(os.environ, {}, clear=True)
    def test_dict_config_survives_first_get_logger(self) -> None:
        system = system_module._system
        own = _NullHandler(system=system)
        system.root.add_handler(own)
        configure_from_dict({"root": {"level": "ERROR"}})
        get_logger("app")
        self.assertEqual(system.root.handlers, [own])
        self.assertEqual(system.root.level, "ERROR")

    @patch.dict(os.environ, {}, clear=True)
    def test_root_set_by_hand_is_kept(self) -> None:
        system = system_module._system
        own = _NullHandler(system=system)
        system.root.add_handler(own)
        system.root.level = "DEBUG"
        get_logger("app")
        self.assertEqual(system.root.handlers, [own])
        self.assertEqual(system.root.level, "DEBUG")

    @patch.dict(os.environ, {}, clear=True)
    def test_global_silence_survives_first_get_logger(self) -> None:
        init_logging()
        hierlog.silence()
        get_logger("app")
        self.assertTrue(system_module._system.silenced_all)

    @patch.dict(os.environ, {"LOG_SILENCE": "console"}, clear=True)
    def test_log_silence_env_applies(self) -> None:
        logger_for("pkg/mod.py")
        self.assertTrue(system_module._system.silenced_console)

    @patch.dict(os.environ, {}, clear=True)
    def test_new_system_from_init_logging_is_configured_again(self) -> None:
        get_logger("app")
        fresh = init_logging()
        self.assertFalse(is_configured(fresh))
        get_logger("app")
        self.assertTrue(is_configured(fresh))
        self.assertEqual(len(fresh.root.handlers), 1)
