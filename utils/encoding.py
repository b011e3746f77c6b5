"""Encoding detection utilities"""

from pathlib import Path

import chardet


def detect_encoding(file_path: Path, default: str = "utf-8") -> str:
    """
    Detect file encoding with fallback support

    Args:
        file_path: Path to file
        default: Encoding used when nothing better is found

    Returns:
        Detected encoding string
    """
    with open(file_path, 'rb') as f:
        raw_sample = f.read(65536)

    if not raw_sample:
        return default

    # Check for BOM
    if raw_sample.startswith(b'\xef\xbb\xbf'):
        return 'utf-8-sig'
    if raw_sample.startswith((b'\xff\xfe', b'\xfe\xff')):
        return 'utf-16'

    # UTF-8 first; a sample cut mid-character still counts
    try:
        raw_sample.decode('utf-8')
        return 'utf-8'
    except UnicodeDecodeError as e:
        if e.start >= len(raw_sample) - 3:
            return 'utf-8'

    result = chardet.detect(raw_sample)
    encoding = (result.get('encoding') or '').lower()
    if encoding and result.get('confidence', 0) > 0.7:
        return 'utf-8' if encoding == 'ascii' else encoding

    # Fallback: try common encodings
    for encoding in ['cp1252', 'latin-1']:
        try:
            raw_sample.decode(encoding)
            return encoding
        except (UnicodeDecodeError, LookupError):
            continue

    return default
