"""Output key and content-type conventions for published HLS files."""

from pathlib import PurePosixPath

MASTER_PLAYLIST_NAME = "master.m3u8"
VARIANT_PLAYLIST_TEMPLATE = "{index}.m3u8"
SEGMENT_FILENAME_TEMPLATE = "{index}_segment{n}.ts"

CONTENT_TYPE_PLAYLIST = "application/x-mpegURL"
CONTENT_TYPE_SEGMENT = "video/MP2T"
CONTENT_TYPE_DEFAULT = "application/octet-stream"

DEFAULT_INPUT_SUFFIX = ".bin"


def content_type_for_filename(filename: str) -> str:
    """Return the Content-Type for an output file by suffix."""
    suffix = PurePosixPath(filename).suffix.lower()
    if suffix == ".m3u8":
        return CONTENT_TYPE_PLAYLIST
    if suffix == ".ts":
        return CONTENT_TYPE_SEGMENT
    return CONTENT_TYPE_DEFAULT


def build_output_key(output_prefix: str, filename: str) -> str:
    """Join prefix and filename as {prefix}/{filename}, ignoring stray slashes on the prefix."""
    prefix = output_prefix.strip("/")
    if not prefix:
        return filename
    return f"{prefix}/{filename}"


def input_suffix_for_key(key: str) -> str:
    """File extension of the source key (e.g. .mp4), or .bin when the key has none."""
    suffix = PurePosixPath(key).suffix
    return suffix if suffix else DEFAULT_INPUT_SUFFIX


def publish_order(filename: str) -> tuple[int, str]:
    """
    Sort key for uploads: segments, then variant playlists, master playlist last.

    Players that find the master playlist can then resolve everything it references.
    """
    if filename == MASTER_PLAYLIST_NAME:
        return (2, filename)
    if filename.endswith(".m3u8"):
        return (1, filename)
    return (0, filename)
