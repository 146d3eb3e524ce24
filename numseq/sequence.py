# This file is part of numseq.
# 
# numseq is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, or at your
# option) any later version.
# 
# numseq is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# for more details.
# 
# You should have received a copy of the GNU General Public License
# along with numseq.  If not, see <https://www.gnu.org/licenses/>.

"""Generation and formatting of numeric sequences.

A sequence is described by a L{SequenceSpec} (first, increment, last) and
rendered according to a L{FormatConfig}. L{resolve} turns one to three
positional tokens into a C{SequenceSpec}, L{render} produces the text, and
L{generate} writes that text to a sink in a single write.

Values are produced by repeatedly adding the increment to the previous
value, and the accumulated value is what gets compared to C{last} and
formatted. Floating point drift is therefore visible, e.g. C{0 0.1 1}
stops at 0.9999999999999999, just like the classic tool.
"""

import decimal
import math
import re
from collections import namedtuple

import numseq.exception
import numseq.util

debug = numseq.util.debug

DEFAULT_SEPARATOR = '\n'
INTEGER_FORMAT = '%.0f'
# Iterations between cancellation checks.
CHECK_INTERVAL = 1000
MAX_CHECK_INTERVAL = 100000
# format_general switches to exponent notation for decimal exponents outside [-4, 6).
MIN_FIXED_EXPONENT = -4
MAX_FIXED_EXPONENT = 6
# printf-style conversions that would truncate a float.
INTEGER_CONVERSIONS = 'diouxXc'
CONVERSION = re.compile(r'%[-#0 +]*(?:\*|\d+)?(?:\.(?:\*|\d*))?[hlL]?([a-zA-Z%])')


class SequenceSpec(namedtuple('SequenceSpec', ['first', 'increment', 'last'])):

    __slots__ = ()

    def ascending(self):
        return self.increment > 0

    def all_integral(self):
        return self.first.is_integer() and self.increment.is_integer() and self.last.is_integer()


class FormatConfig(namedtuple('FormatConfig', ['separator', 'format', 'equal_width'],
                              defaults=(None, None, None))):
    """Output options. C{equal_width} is tri-state: None (unset), True or False.
    An empty separator or format is the same as leaving it unset."""

    __slots__ = ()

    def effective_separator(self):
        return self.separator if self.separator else DEFAULT_SEPARATOR

    def custom_format(self):
        return self.format if self.format else None


# Argument resolution

def resolve(tokens):
    tokens = list(tokens)
    n = len(tokens)
    if n == 0:
        raise numseq.exception.InvalidArgumentCount('missing arguments')
    if n > 3:
        raise numseq.exception.InvalidArgumentCount('too many arguments')
    numbers = [to_number(token) for token in tokens]
    if n == 1:
        first, increment, last = 1.0, 1.0, numbers[0]
    elif n == 2:
        first, increment, last = numbers[0], 1.0, numbers[1]
    else:
        first, increment, last = numbers
    if increment == 0:
        raise numseq.exception.ZeroIncrement()
    return SequenceSpec(first, increment, last)


def to_number(token):
    if type(token) is bool:
        raise numseq.exception.InvalidNumber(token)
    if isinstance(token, (int, float)):
        try:
            x = float(token)
        except OverflowError:
            raise numseq.exception.InvalidNumber(token, 'not a finite number')
    elif isinstance(token, str):
        try:
            x = float(token)
        except ValueError:
            raise numseq.exception.InvalidNumber(token)
    else:
        raise numseq.exception.InvalidNumber(token)
    if not math.isfinite(x):
        raise numseq.exception.InvalidNumber(token, 'not a finite number')
    return x


# Formatting

def choose_format(spec, config):
    if config.equal_width:
        if config.custom_format():
            debug(f'equal width overrides format {config.format!r}')
        # Sign included, so that negative sequences are padded to a common width too.
        width = max(len(INTEGER_FORMAT % spec.first), len(INTEGER_FORMAT % spec.last))
        return f'%0{width}.0f'
    custom = config.custom_format()
    if custom:
        check_format(custom)
        return custom
    return INTEGER_FORMAT if spec.all_integral() else None


# A custom format has to take exactly one float.
def check_format(format):
    for match in CONVERSION.finditer(format):
        conversion = match.group(1)
        if conversion in INTEGER_CONVERSIONS:
            raise numseq.exception.InvalidFormat(
                format, f'%{conversion} is an integer conversion, use a floating point one such as %.0f')
    try:
        format % 0.0
    except (TypeError, ValueError) as e:
        raise numseq.exception.InvalidFormat(format, e)


# format is None for the general representation.
def format_value(x, format):
    return format_general(x) if format is None else format % x


def format_general(x):
    """Shortest representation of C{x} that reads back as C{x}.

    Fixed point is used for decimal exponents in [-4, 6), exponent notation
    otherwise: 2.0 -> '2', 1.5 -> '1.5', 1000000.0 -> '1e+06', 0.00001 -> '1e-05'.
    """
    if x == 0:
        return '-0' if math.copysign(1.0, x) < 0 else '0'
    # repr yields the shortest digit string that round-trips.
    _, digits, exponent = decimal.Decimal(repr(x)).normalize().as_tuple()
    n_digits = len(digits)
    exp = n_digits + exponent - 1
    if exp < MIN_FIXED_EXPONENT or exp >= MAX_FIXED_EXPONENT:
        return '%.*e' % (n_digits - 1, x)
    return '%.*f' % (max(n_digits - exp - 1, 0), x)


# Generation

def values(spec):
    current = spec.first
    if spec.ascending():
        while current <= spec.last:
            yield current
            current += spec.increment
    else:
        while current >= spec.last:
            yield current
            current += spec.increment


def render(spec, config, cancel=None, check_interval=CHECK_INTERVAL):
    return join(config, formatted_values(spec, config, cancel, check_interval))


def generate(spec, config, sink, cancel=None, check_interval=CHECK_INTERVAL):
    """Render the sequence and write it to C{sink} with a single write.

    Returns the number of values written. Raises C{Cancelled} before anything
    is written if C{cancel} fires, and C{WriteFailure} if the sink rejects the
    write.
    """
    formatted = formatted_values(spec, config, cancel, check_interval)
    output = join(config, formatted)
    if output:
        try:
            sink.write(output)
            sink.flush()
        except (OSError, ValueError) as e:
            # ValueError: I/O operation on closed file
            raise numseq.exception.WriteFailure(e)
    return len(formatted)


def formatted_values(spec, config, cancel, check_interval):
    check_interval = validate_check_interval(check_interval)
    if cancel:
        cancel.check()
    format = choose_format(spec, config)
    formatted = []
    for count, x in enumerate(values(spec)):
        if cancel and count % check_interval == 0:
            cancel.check()
        formatted.append(format_value(x, format))
    if cancel:
        cancel.check()
    return formatted


# Non-empty output always ends with exactly one newline, whatever the separator.
def join(config, formatted):
    if len(formatted) == 0:
        return ''
    return config.effective_separator().join(formatted) + '\n'


def validate_check_interval(check_interval):
    if type(check_interval) is not int or not 1 <= check_interval <= MAX_CHECK_INTERVAL:
        raise numseq.exception.KillCommandException(
            f'Cancellation check interval must be an int in [1, {MAX_CHECK_INTERVAL}]: {check_interval}')
    return check_interval
