"""
Tests for the preloader XML codec

Tests the codec module including:
- Decoding complete and partial documents
- Defaulting of missing or malformed scalar values
- Process rule ordering, filtering and tooltip comments
- Encoding layout and determinism
- Parse and schema errors
"""

import logging

import pytest

from xse_preloader_config.core.codec import decode, encode
from xse_preloader_config.core.model import PreloaderConfig, ProcessRule
from xse_preloader_config.errors import ParseError, SchemaError


def wrap(body: str) -> str:
    """Wrap PluginPreloader content in the mandatory elements."""
    return f"<xSE><PluginPreloader>{body}</PluginPreloader></xSE>"


class TestDecode:
    """Test decoding documents into PreloaderConfig."""

    def test_decode_sample_document(self, sample_xml, sample_config):
        """Test every field of a complete document."""
        assert decode(sample_xml) == sample_config

    def test_decode_minimal_process_document(self):
        """Test the single Item example."""
        config = decode(wrap('<Processes><Item Name="skse64_loader.exe" Allow="true"/></Processes>'))

        assert config.processes == [ProcessRule(name="skse64_loader.exe", allow=True)]
        assert config.load_delay == 0
        assert config.hook_delay == 0
        assert config.install_exception_handler is False
        assert config.keep_exception_handler is False
        assert config.original_library == ""
        assert config.load_method_name == "ImportAddressHook"

    def test_empty_section_gives_defaults(self):
        """Test that an empty PluginPreloader decodes to the default config."""
        assert decode(wrap("")) == PreloaderConfig()

    def test_missing_delays_default_to_zero(self):
        config = decode(wrap("<OriginalLibrary>a.dll</OriginalLibrary>"))
        assert config.load_delay == 0
        assert config.hook_delay == 0

    def test_missing_processes_gives_empty_list(self):
        config = decode(wrap("<LoadDelay>5</LoadDelay>"))
        assert config.processes == []

    def test_bytes_with_bom(self, sample_xml, sample_config):
        """Test decoding raw file bytes with a UTF-8 byte order mark."""
        data = b"\xef\xbb\xbf" + sample_xml.encode("utf-8")
        assert decode(data) == sample_config

    def test_bytes_with_declared_encoding(self):
        """Test that raw bytes are decoded with the encoding from the XML declaration."""
        text = '<?xml version="1.0" encoding="iso-8859-1"?>' + wrap("<OriginalLibrary>d\u00e9mo.dll</OriginalLibrary>")
        assert decode(text.encode("latin-1")).original_library == "d\u00e9mo.dll"

    def test_utf16_bytes(self):
        text = '<?xml version="1.0" encoding="utf-16"?>' + wrap("<LoadDelay>7</LoadDelay>")
        assert decode(text.encode("utf-16")).load_delay == 7

    def test_escaped_text(self):
        config = decode(wrap("<OriginalLibrary>C:\\Mods\\a&amp;b.dll</OriginalLibrary>"))
        assert config.original_library == "C:\\Mods\\a&b.dll"


class TestScalarDefaults:
    """Test the defaulting rules for booleans and integers."""

    @pytest.mark.parametrize("text,expected", [
        ("true", True),
        ("True", True),
        (" TRUE ", True),
        ("false", False),
        ("1", False),
        ("yes", False),
        ("", False),
    ])
    def test_boolean_parsing(self, text, expected):
        config = decode(wrap(f"<InstallExceptionHandler>{text}</InstallExceptionHandler>"))
        assert config.install_exception_handler is expected

    @pytest.mark.parametrize("text,expected", [
        ("42", 42),
        (" 42 ", 42),
        ("+7", 7),
        ("-15", -15),
        ("abc", 0),
        ("4.5", 0),
        ("", 0),
        ("2147483647", 2147483647),
        ("2147483648", 0),
        ("-2147483649", 0),
    ])
    def test_integer_parsing(self, text, expected):
        config = decode(wrap(f"<LoadDelay>{text}</LoadDelay>"))
        assert config.load_delay == expected

    def test_malformed_thread_number(self):
        config = decode(wrap(
            '<LoadMethod Name="OnThreadAttach"><OnThreadAttach><ThreadNumber>first</ThreadNumber>'
            "</OnThreadAttach></LoadMethod>"
        ))
        assert config.thread_number == 0
        assert config.load_method_name == "OnThreadAttach"


class TestLoadMethod:
    """Test decoding of the LoadMethod element."""

    def test_missing_load_method_uses_default_name(self):
        assert decode(wrap("")).load_method_name == "ImportAddressHook"

    def test_load_method_without_name(self):
        config = decode(wrap("<LoadMethod><ImportAddressHook><LibraryName>x.dll</LibraryName></ImportAddressHook></LoadMethod>"))
        assert config.load_method_name == "ImportAddressHook"
        assert config.import_library_name == "x.dll"
        assert config.import_function_name == ""

    def test_variants_are_not_cross_validated(self):
        """Test that thread fields are kept for an import-hook method and vice versa."""
        config = decode(wrap(
            '<LoadMethod Name="OnThreadAttach">'
            "<ImportAddressHook><LibraryName>kernel32.dll</LibraryName><FunctionName>Sleep</FunctionName></ImportAddressHook>"
            "<OnThreadAttach><ThreadNumber>3</ThreadNumber></OnThreadAttach>"
            "</LoadMethod>"
        ))
        assert config.load_method_name == "OnThreadAttach"
        assert config.import_library_name == "kernel32.dll"
        assert config.import_function_name == "Sleep"
        assert config.thread_number == 3

    def test_unknown_load_method_name_is_kept(self):
        config = decode(wrap('<LoadMethod Name="CustomInjector"/>'))
        assert config.load_method_name == "CustomInjector"


class TestProcesses:
    """Test decoding of process rules."""

    def test_item_without_name_is_skipped(self):
        config = decode(wrap(
            '<Processes><Item Name="a.exe" Allow="true"/><Item Allow="true"/><Item Name="" Allow="true"/>'
            '<Item Name="b.exe"/></Processes>'
        ))
        assert [rule.name for rule in config.processes] == ["a.exe", "b.exe"]

    def test_skipped_item_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="xse_preloader_config.codec"):
            decode(wrap('<Processes><Item Allow="true"/></Processes>'))
        assert "without a Name" in caplog.text

    def test_order_is_preserved(self):
        names = ["c.exe", "a.exe", "b.exe"]
        items = "".join(f'<Item Name="{name}" Allow="true"/>' for name in names)
        config = decode(wrap(f"<Processes>{items}</Processes>"))
        assert [rule.name for rule in config.processes] == names

    def test_missing_or_invalid_allow_is_false(self):
        config = decode(wrap('<Processes><Item Name="a.exe"/><Item Name="b.exe" Allow="maybe"/></Processes>'))
        assert [rule.allow for rule in config.processes] == [False, False]

    def test_other_elements_are_ignored(self):
        """Test that only Item elements are process rules."""
        config = decode(wrap('<Processes><Process Name="old.exe" Allow="true"/><Item Name="a.exe" Allow="true"/></Processes>'))
        assert [rule.name for rule in config.processes] == ["a.exe"]


class TestTooltips:
    """Test comment tooltips next to process rules."""

    def test_following_comment_is_tooltip(self):
        config = decode(wrap('<Processes><Item Name="a.exe" Allow="true"/><!-- Game --></Processes>'))
        assert config.processes[0].tooltip == "Game"

    def test_comment_inside_item_wins(self):
        config = decode(wrap('<Processes><Item Name="a.exe"><!--inner--></Item><!--after--></Processes>'))
        assert config.processes[0].tooltip == "inner"

    def test_leading_comment_is_ignored(self):
        config = decode(wrap('<Processes><!-- header --><Item Name="a.exe"/></Processes>'))
        assert config.processes[0].tooltip is None

    def test_only_first_following_comment_is_used(self):
        config = decode(wrap('<Processes><Item Name="a.exe"/><!-- one --><!-- two --></Processes>'))
        assert config.processes[0].tooltip == "one"

    def test_comment_after_skipped_item_is_not_attached(self):
        config = decode(wrap('<Processes><Item Name="a.exe"/><Item/><!-- orphan --></Processes>'))
        assert len(config.processes) == 1
        assert config.processes[0].tooltip is None

    def test_item_without_comment_has_no_tooltip(self):
        config = decode(wrap('<Processes><Item Name="a.exe"/><Item Name="b.exe"/><!-- b --></Processes>'))
        assert config.processes[0].tooltip is None
        assert config.processes[1].tooltip == "b"


class TestDecodeErrors:
    """Test parse and schema failures."""

    def test_malformed_xml_raises_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            decode("<xSE><PluginPreloader></xSE>")
        assert exc_info.value.message
        assert exc_info.value.line == 1

    def test_empty_text_raises_parse_error(self):
        with pytest.raises(ParseError):
            decode("")

    def test_invalid_utf8_bytes_raise_parse_error(self):
        with pytest.raises(ParseError):
            decode(b"<xSE>\xff</xSE>")

    def test_unknown_encoding_raises_parse_error(self):
        with pytest.raises(ParseError):
            decode(b'<?xml version="1.0" encoding="no-such-encoding"?><xSE/>')

    def test_wrong_root_raises_schema_error(self):
        with pytest.raises(SchemaError, match="missing root element"):
            decode("<Root><PluginPreloader/></Root>")

    def test_missing_section_raises_schema_error(self):
        with pytest.raises(SchemaError, match="missing PluginPreloader section"):
            decode("<xSE><Other/></xSE>")


class TestEncode:
    """Test encoding PreloaderConfig into XML."""

    def test_declaration(self):
        xml_str = encode(PreloaderConfig())
        assert xml_str.startswith('<?xml version="1.0" encoding="utf-8" standalone="yes"?>\n<xSE>')

    def test_default_layout(self):
        xml_str = encode(PreloaderConfig())
        for fragment in (
            "<OriginalLibrary/>",
            '<LoadMethod Name="ImportAddressHook">',
            "<LibraryName/>",
            "<FunctionName/>",
            "<ThreadNumber>0</ThreadNumber>",
            "<OnProcessAttach/>",
            "<InstallExceptionHandler>false</InstallExceptionHandler>",
            "<KeepExceptionHandler>false</KeepExceptionHandler>",
            "<LoadDelay>0</LoadDelay>",
            "<HookDelay>0</HookDelay>",
            "<Processes/>",
        ):
            assert fragment in xml_str

    def test_element_order(self, sample_config):
        xml_str = encode(sample_config)
        tags = ["<OriginalLibrary>", "<LoadMethod ", "<ImportAddressHook>", "<OnThreadAttach>",
                "<OnProcessAttach/>", "<InstallExceptionHandler>", "<KeepExceptionHandler>",
                "<LoadDelay>", "<HookDelay>", "<Processes>"]
        positions = [xml_str.index(tag) for tag in tags]
        assert positions == sorted(positions)

    def test_process_items(self, sample_config):
        xml_str = encode(sample_config)
        assert '<Item Name="SkyrimSE.exe" Allow="true"/>' in xml_str
        assert '<Item Name="SkyrimSELauncher.exe" Allow="false"/>' in xml_str
        assert "<!-- Skyrim Special Edition -->" in xml_str
        # Tooltip follows its item
        assert xml_str.index('Name="SkyrimSE.exe"') < xml_str.index("Skyrim Special Edition")
        assert xml_str.index("Skyrim Special Edition") < xml_str.index('Name="skse64_loader.exe"')

    def test_booleans_are_lower_case(self):
        xml_str = encode(PreloaderConfig(install_exception_handler=True, keep_exception_handler=True))
        assert "<InstallExceptionHandler>true</InstallExceptionHandler>" in xml_str
        assert "<KeepExceptionHandler>true</KeepExceptionHandler>" in xml_str

    def test_encode_is_deterministic(self, sample_config):
        assert encode(sample_config) == encode(sample_config)

    def test_process_order_is_observable(self):
        first = PreloaderConfig(processes=[ProcessRule("a.exe", True), ProcessRule("b.exe", False)])
        second = PreloaderConfig(processes=[ProcessRule("b.exe", False), ProcessRule("a.exe", True)])
        assert encode(first) != encode(second)

    def test_double_dash_in_tooltip_is_made_safe(self):
        config = PreloaderConfig(processes=[ProcessRule("a.exe", True, tooltip="a -- b---c")])
        xml_str = encode(config)
        comment = xml_str[xml_str.index("<!--") + 4:xml_str.index("-->")]
        assert "--" not in comment
        assert decode(xml_str).processes[0].name == "a.exe"

    def test_unrepresentable_characters_are_dropped(self, caplog):
        """Test that encode still succeeds for characters XML cannot hold."""
        config = PreloaderConfig(
            original_library="a\x01b.dll",
            processes=[ProcessRule("c\x02.exe", True, tooltip="bell\x07")],
        )

        with caplog.at_level(logging.WARNING, logger="xse_preloader_config.codec"):
            decoded = decode(encode(config))

        assert decoded.original_library == "ab.dll"
        assert decoded.processes == [ProcessRule("c.exe", True, tooltip="bell")]
        assert "Dropped characters" in caplog.text


class TestRoundTrip:
    """Test decode(encode(config)) == config."""

    def test_default_config(self):
        config = PreloaderConfig()
        assert decode(encode(config)) == config

    def test_sample_config(self, sample_config):
        assert decode(encode(sample_config)) == sample_config

    def test_sample_document_is_stable(self, sample_xml):
        """Test that decode -> encode -> decode keeps the same data."""
        config = decode(sample_xml)
        assert decode(encode(config)) == config

    def test_thread_attach_config(self):
        config = PreloaderConfig(
            original_library="C:\\Games\\Mods & Tools\\<x>.dll",
            load_method_name="OnThreadAttach",
            thread_number=-1,
            keep_exception_handler=True,
            load_delay=2147483647,
            hook_delay=-2147483648,
            processes=[
                ProcessRule("Fallout4.exe", True, tooltip=""),
                ProcessRule("ゲーム.exe", False, tooltip="Unicode \"quoted\" <name>"),
                ProcessRule("a.exe", True),
            ],
        )
        assert decode(encode(config)) == config

    def test_reencode_is_byte_identical(self, sample_config):
        xml_str = encode(sample_config)
        assert encode(decode(xml_str)) == xml_str
