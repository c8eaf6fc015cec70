"""
XML wire format for symbol streams.

    <?xml version="1.0" encoding="UTF-8"?>
    <compressedData algorithm="lz77">
      <byte value="97"/>
      <reference distance="4" length="3"/>
      <dictionary entry="257"/>
      <reset/>
    </compressedData>
"""

from typing import BinaryIO, Optional
from xml.etree import ElementTree
from xml.sax.saxutils import quoteattr

from codec_ABC import Codec, Decoder, Encoder
from exceptions import CodecError
from symbols import RESET, BackRef, DictRef, Literal, Reset, Symbol

ROOT_TAG = "compressedData"
ALGORITHM_ATTRIB = "algorithm"
BYTE_TAG = "byte"
VALUE_ATTRIB = "value"
REFERENCE_TAG = "reference"
DISTANCE_ATTRIB = "distance"
LENGTH_ATTRIB = "length"
DICTIONARY_TAG = "dictionary"
ENTRY_ATTRIB = "entry"
RESET_TAG = "reset"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


class XmlEncoder(Encoder):
    def _write_header(self, algorithm: str) -> None:
        self._emit(XML_DECLARATION)
        self._emit(f"<{ROOT_TAG} {ALGORITHM_ATTRIB}={quoteattr(algorithm)}>\n")

    def _write_symbol(self, symbol: Symbol) -> None:
        if isinstance(symbol, Literal):
            self._emit(f'  <{BYTE_TAG} {VALUE_ATTRIB}="{symbol.value}"/>\n')
        elif isinstance(symbol, BackRef):
            self._emit(
                f'  <{REFERENCE_TAG} {DISTANCE_ATTRIB}="{symbol.distance}" '
                f'{LENGTH_ATTRIB}="{symbol.length}"/>\n'
            )
        elif isinstance(symbol, DictRef):
            self._emit(f'  <{DICTIONARY_TAG} {ENTRY_ATTRIB}="{symbol.entry}"/>\n')
        elif isinstance(symbol, Reset):
            self._emit(f"  <{RESET_TAG}/>\n")
        else:
            raise CodecError(
                f"Cannot write symbol of unknown type {type(symbol).__name__}"
            )

    def _write_footer(self) -> None:
        self._emit(f"</{ROOT_TAG}>\n")

    def _emit(self, text: str) -> None:
        self.output_stream.write(text.encode("utf-8"))


class XmlDecoder(Decoder):
    """
    Parses the document incrementally, one symbol element at a time.
    """

    def __init__(self, input_stream: BinaryIO):
        super().__init__(input_stream)
        self._events = ElementTree.iterparse(input_stream, events=("start", "end"))
        try:
            _, root = next(self._events)
        except (ElementTree.ParseError, StopIteration) as e:
            raise CodecError(f"Not a valid XML document: {e}") from e
        if root.tag != ROOT_TAG:
            raise CodecError(f"XML document root is not {ROOT_TAG} but {root.tag}")
        if ALGORITHM_ATTRIB not in root.attrib:
            raise CodecError(f"Expected '{ALGORITHM_ATTRIB}' attribute")
        self.algorithm = root.get(ALGORITHM_ATTRIB)
        self._root = root
        self._finished = False

    def read(self) -> Optional[Symbol]:
        if self._finished:
            return None
        try:
            for event, element in self._events:
                if event != "end":
                    continue
                if element is self._root:
                    self._finished = True
                    return None
                symbol = self._to_symbol(element)
                self._root.clear()
                return symbol
        except ElementTree.ParseError as e:
            raise CodecError(f"Malformed XML data: {e}") from e
        raise CodecError(f"Missing closing </{ROOT_TAG}> tag")

    def _to_symbol(self, element) -> Symbol:
        tag = element.tag
        if tag == BYTE_TAG:
            value = _numeric_attrib(element, VALUE_ATTRIB)
            if not 0 <= value <= 255:
                raise CodecError(f"Byte value out of range: {value}")
            return Literal(value)
        if tag == REFERENCE_TAG:
            return BackRef(
                _numeric_attrib(element, DISTANCE_ATTRIB),
                _numeric_attrib(element, LENGTH_ATTRIB),
            )
        if tag == DICTIONARY_TAG:
            return DictRef(_numeric_attrib(element, ENTRY_ATTRIB))
        if tag == RESET_TAG:
            return RESET
        raise CodecError(f"Unexpected tag '{tag}'")


def _numeric_attrib(element, name: str) -> int:
    if name not in element.attrib:
        raise CodecError(f"Expected '{name}' attribute")
    try:
        return int(element.get(name))
    except ValueError as e:
        raise CodecError(f"Invalid value for '{name}' attribute") from e


class XmlCodec(Codec):
    name = "xml"

    def get_encoder(self, output_stream: BinaryIO) -> XmlEncoder:
        return XmlEncoder(output_stream)

    def get_decoder(self, input_stream: BinaryIO) -> XmlDecoder:
        return XmlDecoder(input_stream)
