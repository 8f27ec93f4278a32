from pathlib import Path

import pytest

from pynote.domain.eol_policy import EolStyle
from pynote.domain.models import SAVE_ENCODINGS, Document, EncodingKind, TextEncoding


def test_document_defaults():
    d = Document.untitled()
    assert d.path is None
    assert d.display_name == "Untitled"
    assert d.encoding.kind is EncodingKind.ANSI
    assert d.eol is EolStyle.CRLF
    assert d.eol_name == "Windows (CRLF)"
    assert d.is_modified is False


def test_apply_loaded_metadata_detects_eol_and_clears_modified(tmp_path):
    p = tmp_path / "x.txt"
    d = Document.untitled().mark_modified()
    loaded = d.apply_loaded_metadata(p, TextEncoding.utf8(), "a\nb\n")
    assert loaded.path == p
    assert loaded.display_name == "x.txt"
    assert loaded.encoding.kind is EncodingKind.UTF8
    assert loaded.eol is EolStyle.LF
    assert loaded.is_modified is False
    # the source snapshot is untouched
    assert d.is_modified is True and d.path is None


def test_prepare_for_save_uses_declared_eol():
    d = Document.untitled().set_eol(EolStyle.LF)
    assert d.prepare_for_save("a\r\nb\rc") == "a\nb\nc"


def test_set_eol_ignores_unknown_values():
    d = Document.untitled().set_eol("\n")
    assert d.eol is EolStyle.LF
    assert d.set_eol("bogus").eol is EolStyle.LF
    assert d.set_eol("\n\r").eol is EolStyle.LF


def test_mark_saved_and_reset():
    p = Path("out.txt")
    d = Document.untitled().mark_modified().mark_saved(path=p, encoding=TextEncoding.utf8(bom=True))
    assert d.is_modified is False
    assert d.path == p
    assert d.encoding.label == "UTF-8 (BOM)"

    fresh = d.set_eol(EolStyle.CR).reset_to_untitled()
    assert fresh == Document.untitled()


def test_mark_modified_is_stable():
    d = Document.untitled().mark_modified()
    assert d.mark_modified() is d


@pytest.mark.parametrize(
    "kind, label, bom",
    [
        (EncodingKind.UTF8, "UTF-8", b""),
        (EncodingKind.UTF8_BOM, "UTF-8 (BOM)", b"\xef\xbb\xbf"),
        (EncodingKind.UTF16_LE, "UTF-16 LE", b"\xff\xfe"),
        (EncodingKind.UTF16_BE, "UTF-16 BE", b"\xfe\xff"),
        (EncodingKind.UTF32_LE, "UTF-32 LE", b"\xff\xfe\x00\x00"),
        (EncodingKind.UTF32_BE, "UTF-32 BE", b"\x00\x00\xfe\xff"),
    ],
)
def test_unicode_encodings_label_and_bom(kind, label, bom):
    enc = TextEncoding(kind)
    assert enc.label == label
    assert enc.bom == bom
    assert enc.encode("A").startswith(bom)


def test_ansi_uses_configured_codepage():
    enc = TextEncoding.ansi("cp1252")
    assert enc.label == "ANSI"
    assert enc.encode("é") == b"\xe9"
    assert enc.decode(b"\xe9") == "é"


def test_ansi_unmappable_characters_are_replaced():
    assert TextEncoding.ansi("cp1252").encode("日") == b"?"


def test_other_encoding_is_label_only():
    enc = TextEncoding.other("koi8_r", "Cyrillic (KOI8-R)")
    assert enc.label == "Cyrillic (KOI8-R)"
    assert enc.bom == b""
    assert enc.decode("привет".encode("koi8_r")) == "привет"


def test_decode_replaces_invalid_bytes():
    assert TextEncoding.utf8().decode(b"ok\xff") == "ok�"


def test_save_choices_cover_the_concrete_variants():
    kinds = [e.kind for e in SAVE_ENCODINGS]
    assert kinds[0] is EncodingKind.ANSI
    assert EncodingKind.OTHER not in kinds
    assert len(set(kinds)) == 7
