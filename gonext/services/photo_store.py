"""
Photo file storage.

FileSystemPhotoStore keeps imported images in the configured photo directory.
DisabledPhotoStore is used where no device file system is available: it lists
nothing and refuses every mutation.
"""
import asyncio
import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from gonext.config.settings import PhotoSettings, PhotoBackend
from gonext.core.exceptions import FileSystemError, PhotosUnsupportedError
from gonext.core.ids import generate_id

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PhotoStore(ABC):
    """Capability interface for photo files"""

    supported: bool = True

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the storage location"""

    @abstractmethod
    async def import_file(self, source: PathLike) -> str:
        """Copy an externally captured or picked image into the store and return its path"""

    @abstractmethod
    async def exists(self, path: PathLike) -> bool:
        ...

    @abstractmethod
    async def remove(self, path: PathLike) -> bool:
        """
        Remove a stored file.

        Returns:
            False if the file was already gone

        Raises:
            FileSystemError: If the file exists but cannot be removed
        """


class FileSystemPhotoStore(PhotoStore):
    def __init__(self, directory: PathLike, file_extension: str = ".jpg"):
        self.directory = Path(directory)
        self.file_extension = file_extension

    async def initialize(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError(f"Cannot create photo directory: {exc}", str(self.directory)) from exc
        logger.debug("Photo directory ready at %s", self.directory)

    async def import_file(self, source: PathLike) -> str:
        source_path = Path(source)
        if not source_path.is_file():
            raise FileSystemError(f"Photo file {source_path} not found", str(source_path))

        await self.initialize()
        target = self.directory / f"{generate_id()}{self.file_extension}"
        try:
            await asyncio.to_thread(shutil.copyfile, source_path, target)
        except OSError as exc:
            raise FileSystemError(f"Cannot copy photo: {exc}", str(source_path)) from exc

        logger.info("Imported photo %s as %s", source_path, target)
        return str(target)

    async def exists(self, path: PathLike) -> bool:
        try:
            return await asyncio.to_thread(Path(path).exists)
        except OSError as exc:
            raise FileSystemError(f"Cannot check photo file: {exc}", str(path)) from exc

    async def remove(self, path: PathLike) -> bool:
        try:
            await asyncio.to_thread(Path(path).unlink)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise FileSystemError(f"Cannot delete photo file: {exc}", str(path)) from exc
        return True


class DisabledPhotoStore(PhotoStore):
    supported = False

    async def initialize(self) -> None:
        logger.warning("Photo storage is disabled; photo operations are not supported")

    async def import_file(self, source: PathLike) -> str:
        raise PhotosUnsupportedError("import_file")

    async def exists(self, path: PathLike) -> bool:
        return False

    async def remove(self, path: PathLike) -> bool:
        raise PhotosUnsupportedError("remove")


def create_photo_store(photo_settings: PhotoSettings) -> PhotoStore:
    """Select the photo store implementation from configuration"""
    if photo_settings.backend == PhotoBackend.DISABLED:
        return DisabledPhotoStore()
    return FileSystemPhotoStore(photo_settings.get_directory(), photo_settings.file_extension)
