from .base import ChainedFormat, Format, FunctionFormat, chain, create_format
from .colorize import Colorizer, Uncolorize, colorize, uncolorize
from .json_format import JsonFormat, LogstashFormat, json_format, logstash
from .label import LabelFormat, label
from .metadata import MetadataFormat, metadata
from .ms import MsFormat, ms
from .pad_levels import AlignFormat, Padder, align, pad_levels
from .pretty_print import PrettyPrinter, pretty_print
from .printf import PassthroughFormat, Printf, passthrough, printf
from .simple import CliFormat, SimpleFormat, cli, simple
from .timestamp import Timestamp, timestamp
