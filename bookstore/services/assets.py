"""Book cover storage: keep/replace/delete an image file when its book changes."""

import base64
import binascii
import logging
from pathlib import Path

from bookstore.core.errors import ValidationError

logger = logging.getLogger(__name__)

# Most filesystems cap a single path component at 255 bytes.
MAX_ASSET_NAME_BYTES = 255


def check_asset_name(name: str) -> str:
    """
    Return name if it is a plain file name usable as an asset reference.

    Raises ValidationError for names with path separators, '..', a leading
    dot, control characters, or more than MAX_ASSET_NAME_BYTES UTF-8 bytes.
    """
    if (
        not name
        or len(name.encode("utf-8", errors="replace")) > MAX_ASSET_NAME_BYTES
        or any(ord(ch) < 32 or ord(ch) == 127 for ch in name)
        or "/" in name
        or "\\" in name
        or name.startswith(".")
        or Path(name).name != name
    ):
        raise ValidationError(f"Invalid image file name: {name!r}")
    return name


def decode_content(content_base64: str) -> bytes:
    """Strictly decode base64 image content. Raises ValidationError on bad input."""
    try:
        return base64.b64decode(content_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Image file content is not valid base64.") from e


class AssetStore:
    """
    Files under a single directory, addressed by file name.

    There is no locking: two concurrent updates of the same book may
    interleave their delete/write steps.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, reference: str) -> Path:
        return self.root / check_asset_name(reference)

    def exists(self, reference: str | None) -> bool:
        if not reference:
            return False
        return self.path_for(reference).is_file()

    def store(self, reference: str, content_base64: str) -> Path:
        """Decode content and write it at reference, overwriting any existing file."""
        data = decode_content(content_base64)
        path = self.path_for(reference)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Stored image %s (%d bytes)", reference, len(data))
        return path

    def remove(self, reference: str | None) -> bool:
        """Delete the file at reference. A missing file counts as already removed."""
        if not reference:
            return False
        path = self.path_for(reference)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Deleted image %s", reference)
        return True

    def reconcile(
        self,
        old_reference: str | None,
        new_reference: str | None,
        new_content_base64: str | None,
    ) -> None:
        """
        Bring the stored image in line with a book's new image reference.

        Must run after the book row update has been committed:
        - old reference set and different from the new one: delete the old file;
        - new content given: write it at the new reference (overwrite);
        - no new content: nothing is written, even if the reference changed.
        """
        if old_reference and old_reference != new_reference:
            self.remove(old_reference)
        if new_content_base64:
            if not new_reference:
                raise ValidationError("Image content was sent without an image file name.")
            self.store(new_reference, new_content_base64)

    def load_base64(self, reference: str | None) -> str | None:
        """
        Return the file at reference base64-encoded, or None if there is none.

        Unusable names and unreadable files also give None, so one bad
        record never breaks reads of the others.
        """
        if not reference:
            return None
        try:
            data = self.path_for(reference).read_bytes()
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Could not read image %r: %s", reference, e)
            return None
        return base64.b64encode(data).decode("ascii")
