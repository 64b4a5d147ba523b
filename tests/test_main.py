"""
Tests for the command line entry point.
"""

import io
import json
import logging

import pytest

from camera_inventory import main as cli
from camera_inventory.devices.manager import CameraInventory
from camera_inventory.logger import TRACE, InventoryFormatter, configure_logging, level_from_string


@pytest.fixture
def fake_inventory(mocker, avfoundation_source):
    """Make the CLI build its inventory on top of canned output."""
    inventory = CameraInventory(source=avfoundation_source)
    mocker.patch.object(cli.CameraInventory, "from_config", return_value=inventory)
    return inventory


def test_print_inventory(avfoundation_source):
    inventory = CameraInventory(source=avfoundation_source)
    inventory.refresh()
    out = io.StringIO()

    cli.print_inventory(inventory, out)

    assert out.getvalue().splitlines() == [
        "Device=0, Format=avfoundation, Name=FaceTime HD Camera",
        "  Resolution=1280x720, valid fps rates are 30.00003 15.0",
        "  Resolution=640x480, valid fps rates are 30.00003",
        "Device=2, Format=avfoundation, Name=USB Camera",
        "  Resolution=1920x1080, valid fps rates are 5.0",
    ]


def test_print_inventory_ranges(dshow_source):
    inventory = CameraInventory(source=dshow_source)
    inventory.refresh()
    out = io.StringIO()

    cli.print_inventory(inventory, out)

    assert "  Resolution=640x480, minFPS=15.0, maxFPS=60.0" in out.getvalue().splitlines()


def test_main_json(fake_inventory, capsys, tmp_path):
    exit_code = cli.main(["--config-path", str(tmp_path / "missing.yaml"), "--json"])

    assert exit_code == 0
    sources = json.loads(capsys.readouterr().out)
    assert [s["name"] for s in sources["video_sources"]] == ["FaceTime HD Camera", "USB Camera"]


def test_main_rejects_invalid_config(tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("camera_inventory:\n  ffmpeg:\n    codec: h264\n")

    assert cli.main(["--config-path", str(config_file)]) == 1


def test_level_from_string():
    assert level_from_string("trace") == TRACE
    assert level_from_string("WARN") == logging.WARNING
    assert level_from_string("bogus") == logging.INFO


def test_formatter_abbreviates_level():
    record = logging.LogRecord("camera_inventory.devices", logging.WARNING, __file__, 1,
                               "Failed to probe device %d", (0,), None)

    formatted = InventoryFormatter().format(record)

    assert "[WRN] [camera_inventory.devices] Failed to probe device 0" in formatted
    assert record.levelname == "WARNING"


def test_main_rejects_config_with_wrong_shape(tmp_path):
    config_file = tmp_path / "list.yaml"
    config_file.write_text("camera_inventory:\n  - ffmpeg\n  - dshow\n")

    assert cli.main(["--config-path", str(config_file)]) == 1


def test_configure_logging_writes_log_file(tmp_path):
    logger = configure_logging("debug", log_dir=str(tmp_path / "logs"))
    try:
        logging.getLogger("camera_inventory.devices.manager").debug("Found %s camera", "dshow")
        for handler in logger.handlers:
            handler.flush()

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        log_text = (tmp_path / "logs" / "camera-inventory.log").read_text()
        assert "[DBG] [camera_inventory.devices.manager] Found dshow camera" in log_text
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
