"""Serial port settings value object."""

from dataclasses import dataclass, replace

DEFAULT_BAUDRATE = 115200
DEFAULT_READ_TIMEOUT = 0.1  # seconds

# Rates offered when cycling through baud rates
COMMON_BAUDRATES: tuple[int, ...] = (
    9600,
    19200,
    38400,
    57600,
    115200,
    230400,
    460800,
    921600,
)

VALID_BYTESIZES = frozenset({5, 6, 7, 8})
VALID_PARITIES = frozenset({"N", "E", "O", "M", "S"})
VALID_STOPBITS = frozenset({1, 1.5, 2})


@dataclass(frozen=True, slots=True)
class SerialSettings:
    """Everything needed to open a serial port (value object)."""

    port: str
    baudrate: int = DEFAULT_BAUDRATE
    bytesize: int = 8
    parity: str = "N"
    stopbits: float = 1
    read_timeout: float = DEFAULT_READ_TIMEOUT

    def __post_init__(self) -> None:
        if not self.port:
            raise ValueError("Port must not be empty")
        if self.baudrate <= 0:
            raise ValueError("Baud rate must be positive")
        if self.bytesize not in VALID_BYTESIZES:
            raise ValueError(f"Invalid byte size: {self.bytesize}")
        if self.parity not in VALID_PARITIES:
            raise ValueError(f"Invalid parity: {self.parity}")
        if self.stopbits not in VALID_STOPBITS:
            raise ValueError(f"Invalid stop bits: {self.stopbits}")
        if self.read_timeout <= 0:
            raise ValueError("Read timeout must be positive")

    def with_baudrate(self, baudrate: int) -> "SerialSettings":
        """Return a copy using a different baud rate."""
        return replace(self, baudrate=baudrate)

    def next_common_baudrate(self) -> int:
        """Next rate in COMMON_BAUDRATES after the current one (wraps around)."""
        for rate in COMMON_BAUDRATES:
            if rate > self.baudrate:
                return rate
        return COMMON_BAUDRATES[0]

    def __str__(self) -> str:
        stopbits = int(self.stopbits) if self.stopbits != 1.5 else self.stopbits
        return f"{self.port}@{self.baudrate} {self.bytesize}{self.parity}{stopbits}"
