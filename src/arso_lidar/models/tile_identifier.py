from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from arso_lidar.exceptions.lidar_downloader_exceptions import ParseError


def _parse_unsigned(text: str, what: str) -> int:
    """Strict base-10 unsigned integer, digits only"""
    if not text or not text.isascii() or not text.isdigit():
        raise ParseError(f"{what} is not an unsigned number: '{text}'")
    return int(text)


class PointFormat(Enum):
    """LiDAR product family.

    The value is the token used in URL path segments and as the local file
    extension; ``infix`` goes into the remote filename.
    """
    GKOT = 'gkot'
    OTR = 'otr'
    DTM = 'dmr1'

    @classmethod
    def parse(cls, text: str) -> 'PointFormat':
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ParseError(f"Unknown point format: {text.lower()}") from None

    @property
    def token(self) -> str:
        return self.value

    @property
    def infix(self) -> str:
        return _POINT_FORMAT_INFIXES[self]

    def __str__(self) -> str:
        return self.value


_POINT_FORMAT_INFIXES = {
    PointFormat.GKOT: '',
    PointFormat.OTR: 'R',
    PointFormat.DTM: '1',
}


class FileFormat(Enum):
    """Container format of the remote tile"""
    ZLAS = 'zlas'
    LAZ = 'laz'
    ASC = 'asc'

    @classmethod
    def parse(cls, text: str) -> 'FileFormat':
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ParseError(f"Unknown file format: {text.lower()}") from None

    @property
    def token(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class CoordinateSystem(Enum):
    """National reference frame of the grid indices"""
    D96TM = 'D96TM'
    D48GK = 'D48GK'

    @classmethod
    def parse(cls, text: str) -> 'CoordinateSystem':
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ParseError(f"Unknown coordinate system: {text.lower()}") from None

    @property
    def token(self) -> str:
        return self.value

    @property
    def infix(self) -> str:
        # D96TM -> TM, D48GK -> GK
        return self.value[-2:]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AreaCode:
    """Coverage block, e.g. ``b14``"""
    letter: str
    number: int

    @classmethod
    def parse(cls, text: str) -> 'AreaCode':
        text = text.strip()
        if not text:
            raise ParseError("Area code must have a letter")
        letter, digits = text[0], text[1:]
        if not letter.isalpha():
            raise ParseError(f"Area code must start with a letter: '{text}'")
        number = _parse_unsigned(digits, "Area code number")
        return cls(letter=letter.lower(), number=number)

    @property
    def url_token(self) -> str:
        return f"{self.letter}_{self.number}"

    def __str__(self) -> str:
        return self.url_token


@dataclass(frozen=True, order=True)
class Coordinate:
    """Grid cell index pair"""
    x: int
    y: int

    @classmethod
    def parse(cls, text: str) -> 'Coordinate':
        parts = text.strip().split('_')
        if len(parts) != 2:
            raise ParseError(f"Coordinate must be in the form X_Y: '{text}'")
        x = _parse_unsigned(parts[0], "X coordinate")
        y = _parse_unsigned(parts[1], "Y coordinate")
        return cls(x=x, y=y)

    def render(self, system: Optional[CoordinateSystem],
               point_format: Optional[PointFormat]) -> str:
        """Remote filename stem ``{CS-infix}{PF-infix}_{x}_{y}``"""
        if system is None or point_format is None:
            raise ValueError("Coordinate system and point format must be set before rendering")
        return f"{system.infix}{point_format.infix}_{self.x}_{self.y}"

    def __str__(self) -> str:
        return f"{self.x}_{self.y}"


@dataclass(frozen=True)
class TileIdentifier:
    """Everything needed to address one remote tile"""
    point_format: PointFormat
    file_format: FileFormat
    area_code: AreaCode
    coordinate_system: CoordinateSystem
    coordinate: Coordinate


@dataclass(frozen=True)
class DownloadRequest:
    """Shared tile fields plus the two inclusive grid corners"""
    point_format: PointFormat
    file_format: FileFormat
    area_code: AreaCode
    coordinate_system: CoordinateSystem
    first: Coordinate
    second: Coordinate

    def tile_for(self, coordinate: Coordinate) -> TileIdentifier:
        return TileIdentifier(
            point_format=self.point_format,
            file_format=self.file_format,
            area_code=self.area_code,
            coordinate_system=self.coordinate_system,
            coordinate=coordinate
        )

    def tiles(self) -> Iterator[TileIdentifier]:
        """Tile identifiers for the whole grid, row-major"""
        from arso_lidar.utils.grid_calculator import GridCalculator

        for coordinate in GridCalculator.iter_coordinates(self.first, self.second):
            yield self.tile_for(coordinate)


@dataclass(frozen=True)
class TileLink:
    """A tile paired with the URL it is fetched from"""
    tile: TileIdentifier
    url: str
