"""Tests for era_blender.core.encoding — data URLs, base64 and MIME sniffing."""

from __future__ import annotations

import base64

import pytest

from era_blender.core.encoding import (
    DEFAULT_IMAGE_MIME,
    decode_base64_image,
    decode_image,
    encode_data_url,
    looks_like_image,
    sniff_image_mime,
    split_data_url,
)
from era_blender.core.errors import InvalidImageEncodingError


class TestSplitDataUrl:
    def test_prefix_stripped(self):
        assert split_data_url("data:image/png;base64,AAAA") == ("image/png", "AAAA")

    def test_no_prefix(self):
        assert split_data_url("AAAA") == (None, "AAAA")

    def test_compound_subtype(self):
        mime, payload = split_data_url("data:image/svg+xml;base64,PHN2Zz4=")
        assert mime == "image/svg+xml"
        assert payload == "PHN2Zz4="


class TestDecodeBase64Image:
    def test_data_url_matches_raw_payload(self, png_bytes):
        """Decoding with or without the data-URL prefix yields the same bytes."""
        raw = base64.b64encode(png_bytes).decode()
        assert decode_base64_image(f"data:image/png;base64,{raw}") == decode_base64_image(raw)
        assert decode_base64_image(raw) == png_bytes

    def test_wrapped_lines_tolerated(self, png_bytes):
        raw = base64.b64encode(png_bytes).decode()
        wrapped = "\n".join(raw[i : i + 16] for i in range(0, len(raw), 16))
        assert decode_base64_image(wrapped) == png_bytes

    @pytest.mark.parametrize("value", ["not base64!!", "data:image/png;base64,@@@", "", "abc"])
    def test_invalid_payload_rejected(self, value):
        with pytest.raises(InvalidImageEncodingError):
            decode_base64_image(value)


class TestMimeSniffing:
    def test_png(self, png_bytes):
        assert sniff_image_mime(png_bytes) == "image/png"

    def test_jpeg(self, jpeg_bytes):
        assert sniff_image_mime(jpeg_bytes) == "image/jpeg"

    def test_unknown_bytes(self):
        assert sniff_image_mime(b"definitely not an image") is None

    def test_decode_image_prefers_sniffed_type(self, png_bytes):
        """A mislabelled data URL still reports the real format."""
        url = "data:image/jpeg;base64," + base64.b64encode(png_bytes).decode()
        assert decode_image(url).mime_type == "image/png"

    def test_decode_image_falls_back_to_declared_type(self):
        payload = base64.b64encode(b"opaque bytes").decode()
        assert decode_image(f"data:image/webp;base64,{payload}").mime_type == "image/webp"

    def test_decode_image_defaults_to_jpeg(self):
        payload = base64.b64encode(b"opaque bytes").decode()
        assert decode_image(payload).mime_type == DEFAULT_IMAGE_MIME


class TestEncodeDataUrl:
    def test_sniffs_mime_when_missing(self, png_bytes):
        assert encode_data_url(png_bytes).startswith("data:image/png;base64,")

    def test_explicit_mime(self, png_bytes):
        assert encode_data_url(png_bytes, "image/gif").startswith("data:image/gif;base64,")

    def test_decodes_back(self, jpeg_bytes):
        assert decode_base64_image(encode_data_url(jpeg_bytes)) == jpeg_bytes


class TestLooksLikeImage:
    def test_data_url(self):
        assert looks_like_image("data:image/png;base64,AAAA")

    def test_raw_base64_image(self, png_bytes):
        assert looks_like_image(base64.b64encode(png_bytes).decode())

    def test_scene_text(self):
        assert not looks_like_image("a quiet village square")

    def test_base64_looking_word(self):
        """Valid base64 that is not an image stays text."""
        assert not looks_like_image("abcd")

    def test_text_starting_with_data_label(self):
        """Scene text that merely begins with "Data:" is not a data URL."""
        assert not looks_like_image("Data: a server room at night")

    def test_non_image_data_url_is_text(self):
        assert not looks_like_image("data:text/plain;base64,aGVsbG8=")
