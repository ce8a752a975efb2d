"""XML codec for the xSE PluginPreloader configuration file.

Converts between the on-disk XML document and PreloaderConfig:

    <xSE>
      <PluginPreloader>
        <OriginalLibrary>...</OriginalLibrary>
        <LoadMethod Name="ImportAddressHook">
          <ImportAddressHook><LibraryName/><FunctionName/></ImportAddressHook>
          <OnThreadAttach><ThreadNumber>0</ThreadNumber></OnThreadAttach>
          <OnProcessAttach/>
        </LoadMethod>
        <InstallExceptionHandler>false</InstallExceptionHandler>
        <KeepExceptionHandler>false</KeepExceptionHandler>
        <LoadDelay>0</LoadDelay>
        <HookDelay>0</HookDelay>
        <Processes>
          <Item Name="game.exe" Allow="true"/>
          <!-- tooltip for game.exe -->
        </Processes>
      </PluginPreloader>
    </xSE>

Decoding only fails when the text is not XML or when xSE/PluginPreloader is
missing. Every other element is optional and falls back to its default.
Both functions are pure: no file access, no shared state. encode never
fails; characters XML cannot represent are left out of the output.
"""

import re
import xml.etree.ElementTree as ET
from typing import Optional, Union
from xml.dom import minidom

from ..errors import ParseError, SchemaError
from ..logging_config import get_logger
from .model import DEFAULT_LOAD_METHOD, INVALID_XML_CHARS, PreloaderConfig, ProcessRule

logger = get_logger("codec")

ROOT_TAG = "xSE"
PRELOADER_TAG = "PluginPreloader"
PROCESS_TAG = "Item"

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def decode(text: Union[str, bytes]) -> PreloaderConfig:
    """Decode the text of a preloader XML document.

    Args:
        text: Full document text, or the raw file bytes whose encoding is
            taken from the byte order mark or the XML declaration

    Returns:
        PreloaderConfig with defaults substituted for missing fields

    Raises:
        ParseError: If the text is not well-formed XML
        SchemaError: If the xSE root or the PluginPreloader section is missing
    """
    root = _parse_document(text)

    if root.tag != ROOT_TAG:
        raise SchemaError("missing root element")

    preloader = root.find(PRELOADER_TAG)
    if preloader is None:
        raise SchemaError("missing PluginPreloader section")

    load_method = preloader.find("LoadMethod")
    if load_method is not None:
        load_method_name = load_method.get("Name", DEFAULT_LOAD_METHOD)
    else:
        load_method_name = DEFAULT_LOAD_METHOD

    config = PreloaderConfig(
        original_library=_get_text(preloader, "OriginalLibrary"),
        load_method_name=load_method_name,
        import_library_name=_get_text(preloader, "LoadMethod/ImportAddressHook/LibraryName"),
        import_function_name=_get_text(preloader, "LoadMethod/ImportAddressHook/FunctionName"),
        thread_number=_parse_int(preloader, "LoadMethod/OnThreadAttach/ThreadNumber"),
        install_exception_handler=_parse_bool(preloader, "InstallExceptionHandler"),
        keep_exception_handler=_parse_bool(preloader, "KeepExceptionHandler"),
        load_delay=_parse_int(preloader, "LoadDelay"),
        hook_delay=_parse_int(preloader, "HookDelay"),
        processes=_decode_processes(preloader.find("Processes")),
    )
    logger.debug(f"Decoded preloader configuration: {len(config.processes)} process rules")
    return config


def encode(config: PreloaderConfig) -> str:
    """Encode a configuration as preloader XML text.

    The output is fully determined by the configuration value, so encoding
    the same configuration twice gives identical text.

    Args:
        config: Configuration to serialize

    Returns:
        Pretty-printed XML document with a standalone UTF-8 declaration
    """
    root = ET.Element(ROOT_TAG)
    preloader = ET.SubElement(root, PRELOADER_TAG)

    ET.SubElement(preloader, "OriginalLibrary").text = _xml_text(config.original_library)

    # Every load method section is always written, only Name selects one
    load_method = ET.SubElement(preloader, "LoadMethod", Name=_xml_text(config.load_method_name))
    import_hook = ET.SubElement(load_method, "ImportAddressHook")
    ET.SubElement(import_hook, "LibraryName").text = _xml_text(config.import_library_name)
    ET.SubElement(import_hook, "FunctionName").text = _xml_text(config.import_function_name)
    thread_attach = ET.SubElement(load_method, "OnThreadAttach")
    ET.SubElement(thread_attach, "ThreadNumber").text = str(config.thread_number)
    ET.SubElement(load_method, "OnProcessAttach")

    ET.SubElement(preloader, "InstallExceptionHandler").text = _format_bool(config.install_exception_handler)
    ET.SubElement(preloader, "KeepExceptionHandler").text = _format_bool(config.keep_exception_handler)
    ET.SubElement(preloader, "LoadDelay").text = str(config.load_delay)
    ET.SubElement(preloader, "HookDelay").text = str(config.hook_delay)

    processes = ET.SubElement(preloader, "Processes")
    for rule in config.processes:
        ET.SubElement(processes, PROCESS_TAG, Name=_xml_text(rule.name), Allow=_format_bool(rule.allow))
        if rule.tooltip is not None:
            processes.append(ET.Comment(_format_comment(_xml_text(rule.tooltip))))

    document = minidom.parseString(ET.tostring(root, encoding="unicode"))
    xml_str = document.toprettyxml(indent="  ", newl="\n", encoding="utf-8", standalone=True).decode("utf-8")
    logger.debug(f"Encoded preloader configuration: {len(config.processes)} process rules")
    return xml_str


def _parse_document(text: Union[str, bytes]) -> ET.Element:
    """Parse document text into an element tree that keeps comment nodes.

    Bytes go to the parser undecoded so that a byte order mark or the
    encoding named in the XML declaration is honoured.
    """
    if isinstance(text, str) and text.startswith("\ufeff"):
        text = text[1:]

    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        parser.feed(text)
        return parser.close()
    except ET.ParseError as e:
        line, column = e.position
        raise ParseError(str(e), line=line, column=column) from e
    except (ValueError, LookupError) as e:
        raise ParseError(f"Document encoding is not supported: {e}") from e


def _decode_processes(processes: Optional[ET.Element]) -> list[ProcessRule]:
    """Read process rules in document order.

    A comment inside an Item, or else the first comment following it, is the
    rule's tooltip. Items without a Name are skipped.
    """
    if processes is None:
        return []

    rules = []
    previous: Optional[ProcessRule] = None
    for child in processes:
        if child.tag is ET.Comment:
            if previous is not None and previous.tooltip is None:
                previous.tooltip = _comment_text(child)
            continue

        if child.tag != PROCESS_TAG:
            previous = None
            continue

        name = child.get("Name", "")
        if not name:
            logger.warning("Skipping process entry without a Name attribute")
            previous = None
            continue

        inner_comment = next((node for node in child if node.tag is ET.Comment), None)
        rule = ProcessRule(
            name=name,
            allow=_to_bool(child.get("Allow")),
            tooltip=_comment_text(inner_comment) if inner_comment is not None else None,
        )
        rules.append(rule)
        previous = rule

    return rules


# Helper functions for XML parsing
def _get_text(parent: ET.Element, path: str, default: str = "") -> str:
    """Get text content of a descendant element."""
    elem = parent.find(path)
    return elem.text if elem is not None and elem.text else default


def _parse_bool(parent: ET.Element, path: str) -> bool:
    """Parse a boolean value from a descendant element."""
    elem = parent.find(path)
    return _to_bool(elem.text if elem is not None else None)


def _parse_int(parent: ET.Element, path: str) -> int:
    """Parse a 32-bit integer from a descendant element, 0 when invalid."""
    elem = parent.find(path)
    if elem is None or not elem.text:
        return 0

    value = elem.text.strip()
    if not _INT_PATTERN.fullmatch(value):
        return 0

    number = int(value)
    if number < INT32_MIN or number > INT32_MAX:
        return 0
    return number


def _to_bool(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _comment_text(comment: ET.Element) -> str:
    return (comment.text or "").strip()


def _format_comment(tooltip: str) -> str:
    # '--' may not appear inside an XML comment
    text = tooltip
    while "--" in text:
        text = text.replace("--", "- -")
    return f" {text} "


def _xml_text(value: str) -> str:
    cleaned = INVALID_XML_CHARS.sub("", value)
    if cleaned != value:
        logger.warning(f"Dropped characters XML cannot represent from {cleaned!r}")
    return cleaned
