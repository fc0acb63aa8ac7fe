"""Tests for serial port discovery."""

from types import SimpleNamespace

import pytest

from serialtail.domain import PortInfo, TransportUnavailableError
from serialtail.infrastructure.serial import list_serial_ports, require_serial_ports
from serialtail.infrastructure.serial import port_discovery


def fake_comports(*devices):
    return lambda: [
        SimpleNamespace(device=device, description=description, hwid=hwid)
        for device, description, hwid in devices
    ]


class TestListSerialPorts:
    """Tests for list_serial_ports."""

    def test_lists_sorted(self, monkeypatch):
        """Test ports come back as PortInfo sorted by device."""
        monkeypatch.setattr(
            port_discovery.list_ports,
            "comports",
            fake_comports(
                ("/dev/ttyUSB1", "CP2102", "USB VID:PID=10C4:EA60"),
                ("/dev/ttyACM0", "Arduino Uno", "USB VID:PID=2341:0043"),
            ),
        )

        ports = list_serial_ports()

        assert [p.device for p in ports] == ["/dev/ttyACM0", "/dev/ttyUSB1"]
        assert ports[0] == PortInfo("/dev/ttyACM0", "Arduino Uno", "USB VID:PID=2341:0043")

    def test_missing_description(self, monkeypatch):
        """Test None descriptions become empty strings."""
        monkeypatch.setattr(
            port_discovery.list_ports, "comports", fake_comports(("COM3", None, None))
        )

        assert list_serial_ports() == [PortInfo("COM3", "", "")]

    def test_require_with_no_ports(self, monkeypatch):
        """Test require_serial_ports fails when nothing is attached."""
        monkeypatch.setattr(port_discovery.list_ports, "comports", fake_comports())

        with pytest.raises(TransportUnavailableError):
            require_serial_ports()


class TestPortInfo:
    """Tests for PortInfo display."""

    def test_str_with_description(self):
        """Test description is shown next to the device."""
        assert str(PortInfo("COM3", "USB Serial")) == "COM3 (USB Serial)"

    def test_str_without_description(self):
        """Test n/a descriptions are hidden."""
        assert str(PortInfo("/dev/ttyS0", "n/a")) == "/dev/ttyS0"
