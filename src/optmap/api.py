## optmap — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import *
from .errors import *
from .grammar import parse_option_key, compile_options
from .options import OptionParser, parse_options, parse_options_impl, error
from .formatting import format_help, display_help, format_value
