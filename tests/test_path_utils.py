"""
Tests for path encoding
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from dirwatch.core.errors import PathEncodingError
from dirwatch.utils.path_utils import (
    DEFAULT_PATH_MAX,
    display_path,
    encode_watch_path,
    native_path_length,
    platform_max_path_length,
)


class TestEncodeWatchPath:
    """Test converting paths for the OS"""
    
    def test_str_and_pathlike(self, tmp_path):
        """Test that str and Path give the same bytes"""
        expected = os.fsencode(str(tmp_path))
        assert encode_watch_path(str(tmp_path)) == expected
        assert encode_watch_path(tmp_path) == expected
    
    def test_bytes_pass_through(self):
        """Test that bytes are already native"""
        assert encode_watch_path(b'/data/assets') == b'/data/assets'
    
    def test_limit_is_inclusive(self):
        """Test that a path exactly at the limit is accepted"""
        path = '/' + 'a' * 15
        assert encode_watch_path(path, max_length=16) == path.encode()
    
    def test_over_length_is_rejected(self):
        """Test that a long path is rejected instead of truncated"""
        with pytest.raises(PathEncodingError) as exc_info:
            encode_watch_path('/' + 'a' * 16, max_length=16)
        assert 'longer than the 16 byte limit' in str(exc_info.value)
        assert exc_info.value.path == '/' + 'a' * 16
    
    def test_length_counts_encoded_bytes(self):
        """Test that multi-byte characters count as their encoded size"""
        if sys.getfilesystemencoding().lower() not in ('utf-8', 'utf8'):
            pytest.skip("filesystem encoding is not UTF-8")
        path = '/' + 'é' * 8
        with pytest.raises(PathEncodingError):
            encode_watch_path(path, max_length=10)
    
    def test_platform_limit_used_by_default(self):
        """Test the default limit"""
        limit = platform_max_path_length()
        encode_watch_path('/' + 'a' * (limit - 1))
        with pytest.raises(PathEncodingError):
            encode_watch_path('/' + 'a' * limit)
    
    def test_nul_byte(self):
        """Test that embedded NUL bytes are rejected"""
        with pytest.raises(PathEncodingError, match="NUL"):
            encode_watch_path('/tmp/bad\x00name')
    
    def test_empty_path(self):
        """Test that an empty path is rejected"""
        with pytest.raises(PathEncodingError, match="empty"):
            encode_watch_path('')
    
    def test_wrong_type(self):
        """Test that non-path objects are an encoding error"""
        with pytest.raises(PathEncodingError, match="cannot encode"):
            encode_watch_path(42)


    def test_windows_counts_wide_characters(self):
        """Test that the Windows limit is measured in UTF-16 code units, not bytes"""
        if sys.getfilesystemencoding().lower() not in ('utf-8', 'utf8'):
            pytest.skip("filesystem encoding is not UTF-8")
        # 101 characters, 297 bytes in UTF-8
        path = 'C:\\' + '\u6587' * 98
        with patch('dirwatch.utils.path_utils.sys.platform', 'win32'):
            assert native_path_length(os.fsencode(path)) == (101, 'character')
            assert encode_watch_path(path) == os.fsencode(path)
            with pytest.raises(PathEncodingError, match="260 characters, longer than the 259 character limit"):
                encode_watch_path('C:\\' + '\u6587' * 257)
    
    def test_posix_counts_bytes(self):
        """Test that other platforms measure the encoded bytes"""
        with patch('dirwatch.utils.path_utils.sys.platform', 'linux'):
            assert native_path_length(b'/data/assets') == (12, 'byte')


class TestPlatformMaxPathLength:
    """Test the platform path limit"""
    
    def test_windows_limit(self):
        """Test MAX_PATH on Windows"""
        with patch('dirwatch.utils.path_utils.sys.platform', 'win32'):
            assert platform_max_path_length() == 259
    
    def test_pathconf_failure_falls_back(self):
        """Test the fallback when pathconf is unavailable"""
        with patch('dirwatch.utils.path_utils.sys.platform', 'linux'), \
             patch('dirwatch.utils.path_utils.os.pathconf', side_effect=OSError, create=True):
            assert platform_max_path_length() == DEFAULT_PATH_MAX - 1


class TestDisplayPath:
    """Test converting paths for messages"""
    
    def test_display_forms(self):
        """Test the string forms used in messages"""
        assert display_path(Path('/data')) == str(Path('/data'))
        assert display_path(b'/data') == '/data'
        assert display_path(42) == '42'
