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

import numseq.argsparser
import numseq.core
import numseq.sequence

Op = numseq.core.Op


HELP = '''
seq [-s|--separator SEP] [-f|--format FORMAT] [-w|--equal-width | --no-equal-width] [FIRST [INCREMENT]] LAST

    -s, --separator         Separates consecutive numbers. Defaults to a newline.

    -f, --format            A printf-style pattern used to format each number, e.g. %.2f.
                            The number is a float, so integer conversions such as
                            %d and %x are rejected. Use %.0f instead.

    -w, --equal-width       Pad numbers with leading zeros, to a common width.

    --no-equal-width        Do not pad numbers. This is the default.

    FIRST                   The first number of the sequence. Defaults to 1.

    INCREMENT               The difference between consecutive numbers. Defaults to 1.

    LAST                    No number beyond LAST is written.

Writes the numbers FIRST, FIRST + INCREMENT, FIRST + 2 * INCREMENT, ...
stopping before the first number greater than LAST (or less than LAST,
if INCREMENT is negative). INCREMENT must not be zero. The sequence is
empty if LAST cannot be reached.

If FIRST, INCREMENT, and LAST are all integers, the numbers are written
as integers. Otherwise each number is written in its shortest form. With
--equal-width, every number is padded with zeros to the width of the
wider of FIRST and LAST; this overrides --format.

Output ends with a newline, unless the sequence is empty.
'''


def seq(*numbers, separator=None, format=None, equal_width=None):
    args = []
    if separator:
        args.extend(['--separator', separator])
    if format:
        args.extend(['--format', format])
    if equal_width is True:
        args.append('--equal-width')
    elif equal_width is False:
        args.append('--no-equal-width')
    args.extend(numbers)
    return Seq(), args


class SeqArgsParser(numseq.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('seq', env)
        self.add_flag_one_value('separator', '-s', '--separator', convert=self.check_str, target='separator_arg')
        self.add_flag_one_value('format', '-f', '--format', convert=self.check_str, target='format_arg')
        self.add_flag_no_value('equal_width', '-w', '--equal-width')
        self.add_flag_no_value('no_equal_width', None, '--no-equal-width')
        self.add_anon_list('numbers', convert=self.check_number_token, target='numbers_arg')
        self.at_most_one('equal_width', 'no_equal_width')
        self.validate()


class Seq(Op):

    def __init__(self):
        super().__init__()
        self.numbers_arg = None
        self.separator_arg = None
        self.format_arg = None
        self.equal_width = False
        self.no_equal_width = False
        self.spec = None
        self.config = None

    def __repr__(self):
        args = [str(x) for x in self.numbers_arg] if self.numbers_arg else []
        if self.separator_arg is not None:
            args.append(f'separator={self.separator_arg!r}')
        if self.format_arg is not None:
            args.append(f'format={self.format_arg!r}')
        if self.equal_width:
            args.append('equal_width=True')
        elif self.no_equal_width:
            args.append('equal_width=False')
        args_description = ', '.join(args)
        return f'seq({args_description})'

    # AbstractOp

    def setup(self, env):
        self.spec = numseq.sequence.resolve(self.numbers_arg if self.numbers_arg else [])
        equal_width = (True if self.equal_width else
                       False if self.no_equal_width else
                       None)
        self.config = numseq.sequence.FormatConfig(separator=self.separator_arg,
                                                   format=self.format_arg,
                                                   equal_width=equal_width)
        # Reject a bad format before generating anything
        numseq.sequence.choose_format(self.spec, self.config)

    # Op

    def run(self, env):
        return numseq.sequence.generate(self.spec,
                                        self.config,
                                        env.stdout,
                                        cancel=env.cancel,
                                        check_interval=env.check_interval)
