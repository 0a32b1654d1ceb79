"""Base class for ephemeris storage codecs."""

import io
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Optional, Tuple, Union

from ..errors import FileIOError, InvalidConfigError, ParseError
from ..logging import get_logger
from ..model import EphemerisCollection

logger = get_logger(__name__)

PathLike = Union[str, Path]


class EphemerisCodec(ABC):
    """Paired encoder/decoder for one on-disk ephemeris format.

    Subclasses implement write() and read() against an open stream. This class
    provides file handling on top of them: opening, closing on every exit path,
    and reporting storage failures as FileIOError so callers can tell them
    apart from malformed content.
    """

    #: Short name used on the command line
    format_name: str = ""
    #: File extensions mapped to this format
    extensions: Tuple[str, ...] = ()
    #: Whether streams are opened in binary mode
    binary: bool = False

    @abstractmethod
    def write(self, collection: EphemerisCollection, stream: IO[Any]) -> None:
        """Encode a collection to an open stream.

        Args:
            collection: The collection to encode; it is not modified
            stream: A writable stream of the codec's mode

        Raises:
            InvalidConfigError: If the collection is missing or empty
        """
        pass

    @abstractmethod
    def read(self, stream: IO[Any]) -> EphemerisCollection:
        """Decode a collection from an open stream.

        Args:
            stream: A readable stream of the codec's mode

        Returns:
            A newly allocated collection owned by the caller

        Raises:
            ParseError: If the content is malformed
            AllocationError: If point storage cannot be allocated
        """
        pass

    def save(self, collection: Optional[EphemerisCollection], path: PathLike) -> None:
        """Encode a collection to a file.

        A failure part way through leaves a truncated file behind; the file is
        not replaced atomically.

        Raises:
            InvalidConfigError: If the collection is missing or empty
            FileIOError: If the file cannot be opened or written
        """
        self.require_collection(collection)
        start_time = time.time()
        try:
            with self._open(path, "w") as stream:
                self.write(collection, stream)  # type: ignore[arg-type]
        except FileIOError:
            raise
        except OSError as e:
            raise FileIOError(f"Cannot write {path}: {e}") from e

        logger.info(
            f"Saved {collection.object_count} objects to {path} "  # type: ignore[union-attr]
            f"as {self.format_name} in {time.time() - start_time:.3f}s"
        )

    def load(self, path: PathLike) -> EphemerisCollection:
        """Decode a collection from a file.

        Raises:
            FileIOError: If the file cannot be opened or read
            ParseError: If the content is malformed
            AllocationError: If point storage cannot be allocated
        """
        start_time = time.time()
        try:
            with self._open(path, "r") as stream:
                collection = self.read(stream)
        except FileIOError:
            raise
        except UnicodeDecodeError as e:
            raise ParseError(f"{path} is not valid UTF-8 text: {e}") from e
        except OSError as e:
            raise FileIOError(f"Cannot read {path}: {e}") from e

        logger.info(
            f"Loaded {collection.object_count} objects from {path} "
            f"as {self.format_name} in {time.time() - start_time:.3f}s"
        )
        return collection

    def encode(self, collection: Optional[EphemerisCollection]) -> Union[bytes, str]:
        """Encode a collection to an in-memory bytes or str value."""
        self.require_collection(collection)
        stream: IO[Any] = io.BytesIO() if self.binary else io.StringIO()
        self.write(collection, stream)  # type: ignore[arg-type]
        return stream.getvalue()

    def decode(self, data: Union[bytes, str]) -> EphemerisCollection:
        """Decode a collection from an in-memory bytes or str value."""
        if self.binary:
            if isinstance(data, str):
                raise InvalidConfigError(f"{self.format_name} data must be bytes")
            return self.read(io.BytesIO(data))
        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"Data is not valid UTF-8 text: {e}") from e
        return self.read(io.StringIO(data))

    @staticmethod
    def require_collection(collection: Optional[EphemerisCollection]) -> None:
        """Reject collections that cannot be encoded.

        Raises:
            InvalidConfigError: If the collection is missing, released or empty
        """
        if collection is None:
            raise InvalidConfigError("No collection given")
        if collection.released:
            raise InvalidConfigError("Collection has been released")
        if collection.object_count <= 0:
            raise InvalidConfigError("Collection has no objects")

    def _open(self, path: PathLike, mode: str) -> IO[Any]:
        if self.binary:
            return open(path, mode + "b")
        return open(path, mode, encoding="utf-8", newline="")
