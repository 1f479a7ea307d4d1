#!/usr/bin/env python3
"""
Content Signature Registry

Classifies files by their leading bytes (magic numbers) into MIME type
strings. File extensions are never consulted.
"""

import logging
import pathlib
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Enough for every matcher below, including tar's header at offset 257
HEADER_SIZE = 8192

UNKNOWN_TYPE = "unknown"


@dataclass(frozen=True)
class Signature:
    """A known format: MIME type plus a predicate over the file header"""

    mime_type: str
    matcher: Callable[[bytes], bool]


def _prefix(magic: bytes, offset: int = 0) -> Callable[[bytes], bool]:
    def match(header: bytes) -> bool:
        return header[offset : offset + len(magic)] == magic

    return match


def _riff(form: bytes) -> Callable[[bytes], bool]:
    def match(header: bytes) -> bool:
        return header[:4] == b"RIFF" and header[8:12] == form

    return match


def _ftyp(*brands: bytes) -> Callable[[bytes], bool]:
    def match(header: bytes) -> bool:
        return header[4:8] == b"ftyp" and header[8:12] in brands

    return match


def _is_mp3_frame(header: bytes) -> bool:
    # MPEG audio frame sync: 11 set bits, layer III
    return len(header) >= 2 and header[0] == 0xFF and header[1] in (0xFB, 0xF3, 0xF2)


def _is_matroska(header: bytes) -> bool:
    return header[:4] == b"\x1a\x45\xdf\xa3" and b"matroska" in header[:64]


def _is_webm(header: bytes) -> bool:
    return header[:4] == b"\x1a\x45\xdf\xa3" and b"webm" in header[:64]


def _is_java_class(header: bytes) -> bool:
    # Shares its magic with Mach-O fat binaries; class files carry a major version >= 45
    return header[:4] == b"\xca\xfe\xba\xbe" and len(header) >= 8 and int.from_bytes(header[6:8], "big") >= 45


def _is_mach_o_fat(header: bytes) -> bool:
    return header[:4] == b"\xca\xfe\xba\xbe" and not _is_java_class(header)


# Order matters: more specific signatures come before shorter prefixes
SIGNATURES: tuple[Signature, ...] = (
    # images
    Signature("image/png", _prefix(b"\x89PNG\r\n\x1a\n")),
    Signature("image/jpeg", _prefix(b"\xff\xd8\xff")),
    Signature("image/gif", _prefix(b"GIF87a")),
    Signature("image/gif", _prefix(b"GIF89a")),
    Signature("image/webp", _riff(b"WEBP")),
    Signature("image/tiff", _prefix(b"II*\x00")),
    Signature("image/tiff", _prefix(b"MM\x00*")),
    Signature("image/vnd.adobe.photoshop", _prefix(b"8BPS")),
    Signature("image/x-icon", _prefix(b"\x00\x00\x01\x00")),
    Signature("image/heif", _ftyp(b"heic", b"heix", b"mif1", b"msf1")),
    Signature("image/avif", _ftyp(b"avif", b"avis")),
    Signature("image/bmp", _prefix(b"BM")),
    # video
    Signature("video/quicktime", _ftyp(b"qt  ")),
    Signature("video/x-m4v", _ftyp(b"M4V ", b"M4VH", b"M4VP")),
    Signature("audio/m4a", _ftyp(b"M4A ")),
    Signature("video/3gpp", _ftyp(b"3gp4", b"3gp5", b"3ge6", b"3gg6")),
    Signature("video/mp4", _ftyp(b"isom", b"iso2", b"mp41", b"mp42", b"avc1", b"dash", b"MSNV", b"F4V ")),
    Signature("video/x-msvideo", _riff(b"AVI ")),
    Signature("video/webm", _is_webm),
    Signature("video/x-matroska", _is_matroska),
    Signature("video/x-flv", _prefix(b"FLV\x01")),
    Signature("video/mpeg", _prefix(b"\x00\x00\x01\xba")),
    # audio
    Signature("audio/x-wav", _riff(b"WAVE")),
    Signature("audio/mpeg", _prefix(b"ID3")),
    Signature("audio/x-flac", _prefix(b"fLaC")),
    Signature("audio/ogg", _prefix(b"OggS")),
    Signature("audio/midi", _prefix(b"MThd")),
    Signature("audio/x-aiff", _prefix(b"FORM")),
    Signature("audio/mpeg", _is_mp3_frame),
    # archives
    Signature("application/x-7z-compressed", _prefix(b"7z\xbc\xaf\x27\x1c")),
    Signature("application/vnd.rar", _prefix(b"Rar!\x1a\x07")),
    Signature("application/x-xz", _prefix(b"\xfd7zXZ\x00")),
    Signature("application/zstd", _prefix(b"\x28\xb5\x2f\xfd")),
    Signature("application/gzip", _prefix(b"\x1f\x8b")),
    Signature("application/x-bzip2", _prefix(b"BZh")),
    Signature("application/x-tar", _prefix(b"ustar", 257)),
    Signature("application/epub+zip", lambda h: h[:4] == b"PK\x03\x04" and b"mimetypeapplication/epub+zip" in h[:128]),
    Signature("application/zip", _prefix(b"PK\x03\x04")),
    Signature("application/zip", _prefix(b"PK\x05\x06")),
    Signature("application/zip", _prefix(b"PK\x07\x08")),
    Signature("application/x-rpm", _prefix(b"\xed\xab\xee\xdb")),
    Signature("application/vnd.debian.binary-package", _prefix(b"!<arch>\ndebian")),
    Signature("application/x-unix-archive", _prefix(b"!<arch>\n")),
    # documents
    Signature("application/pdf", _prefix(b"%PDF")),
    Signature("application/rtf", _prefix(b"{\\rtf")),
    Signature("application/postscript", _prefix(b"%!")),
    Signature("application/x-ole-storage", _prefix(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1")),
    # fonts
    Signature("application/font-woff", _prefix(b"wOFF")),
    Signature("application/font-woff", _prefix(b"wOF2")),
    Signature("application/font-sfnt", _prefix(b"\x00\x01\x00\x00\x00")),
    Signature("application/font-sfnt", _prefix(b"OTTO")),
    # executables and binaries
    Signature("application/x-executable", _prefix(b"\x7fELF")),
    Signature("application/vnd.microsoft.portable-executable", _prefix(b"MZ")),
    Signature("application/wasm", _prefix(b"\x00asm")),
    Signature("application/java", _is_java_class),
    Signature("application/x-mach-binary", _is_mach_o_fat),
    Signature("application/x-mach-binary", _prefix(b"\xfe\xed\xfa\xce")),
    Signature("application/x-mach-binary", _prefix(b"\xfe\xed\xfa\xcf")),
    Signature("application/x-mach-binary", _prefix(b"\xce\xfa\xed\xfe")),
    Signature("application/x-mach-binary", _prefix(b"\xcf\xfa\xed\xfe")),
    Signature("application/vnd.sqlite3", _prefix(b"SQLite format 3\x00")),
    Signature("application/x-nintendo-nes-rom", _prefix(b"NES\x1a")),
)


def sniff_bytes(header: bytes) -> Optional[str]:
    """Return the MIME type for a file header, or None if nothing matches"""
    if not header:
        return None
    for signature in SIGNATURES:
        if signature.matcher(header):
            return signature.mime_type
    return None


def sniff_file(file_path: pathlib.Path) -> str:
    """Classify a file by content

    Returns:
        MIME type string, or "unknown" for empty, unrecognized or unreadable files
    """
    try:
        with open(file_path, "rb") as f:
            header = f.read(HEADER_SIZE)
    except OSError as e:
        logger.debug("Cannot read %s for type detection: %s", file_path, e)
        return UNKNOWN_TYPE

    return sniff_bytes(header) or UNKNOWN_TYPE
