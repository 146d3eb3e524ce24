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

import numseq.exception
import numseq.util

# An op has arguments. An argument is one of:
#    - An optional flag with no value
#    - An optional flag with one value
#    - An anonymous value, not preceded by a flag. Anonymous values are collected
#      into a single list, in the order given.
# If a flag taking a value is followed by another arg, then that arg is the flag's
# value, even if it looks like a number.
#
# Constraints on groups of flags:
#     - At most one must be specified
# Additional constraints (e.g. on the number of anonymous values) are checked by the op.

VALUE_NONE = 1
VALUE_ONE = 2


# ----------------------------------------------------------------------------------------------------------------------

# Args

class ArgsError(numseq.exception.KillCommandException):

    def __init__(self, op_name, message):
        super().__init__(f'Operator {op_name}: {message}')


class Arg:

    def __init__(self, op_name, name, convert, target):
        assert name is not None
        self.op_name = op_name
        self.name = name
        self.target = target if target else name
        self.convert = convert if convert else Arg.identity

    def __repr__(self):
        return self.name

    @staticmethod
    def identity(_, x):
        return x


class Flag(Arg):

    def __init__(self, op_name, name, convert, short, long, value, target=None):
        super().__init__(op_name, name, convert, target)
        assert short is not None or long is not None
        assert short is None or len(short) == 2 and short[0] == '-' and short[1] != '-'
        assert long is None or len(long) >= 3 and long[:2] == '--' and long[2] != '-'
        assert value in (VALUE_NONE, VALUE_ONE)
        self.short = short
        self.long = long
        self.value = value

    def __repr__(self):
        return (f'{self.short}|{self.long}' if self.short and self.long else
                self.short if self.short else
                self.long)

    # Negative numbers look like flags, but aren't.
    @staticmethod
    def plausible(x):
        if not isinstance(x, str):
            return False
        if len(x) < 2 or x[0] != '-':
            return False
        try:
            float(x)
            return False
        except ValueError:
            return True


class AnonList(Arg):

    def __init__(self, op_name, name, convert, target=None):
        super().__init__(op_name, name, convert, target)


# ----------------------------------------------------------------------------------------------------------------------

# Interface

class ArgsParser:

    def __init__(self, op_name, env):
        self.op_name = op_name
        self.env = env
        self.flag_args = []
        self.anon_list_arg = None
        self.at_most_one_names = []
        self.validated = False

    def add_flag_no_value(self, name, short, long, target=None):
        self.flag_args.append(Flag(self.op_name, name, None, short, long, VALUE_NONE, target))

    def add_flag_one_value(self, name, short, long, convert=None, target=None):
        self.flag_args.append(Flag(self.op_name, name, convert, short, long, VALUE_ONE, target))

    def add_anon_list(self, name, convert=None, target=None):
        self.anon_list_arg = AnonList(self.op_name, name, convert, target)

    def at_most_one(self, *names):
        self.at_most_one_names.append(self.name_set(names))

    def validate(self):
        self.check_flag_symbols_unique()
        self.check_arg_names_unique()
        self.validated = True

    # ------------------------------------------------------------------------------------------------------------------

    # Conversion and type checking

    def check_str(self, arg, x):
        if not isinstance(x, str):
            raise ArgsError(arg.op_name, f'{arg.name} must be a string: {x}')
        return x

    # Numbers are parsed by the op, so that argument counts can be checked first.
    def check_number_token(self, arg, x):
        if type(x) is bool or not numseq.util.one_of(x, (str, int, float)):
            raise ArgsError(arg.op_name, f'{arg.name} must be a number or a string: {x!r}')
        return x

    # ------------------------------------------------------------------------------------------------------------------

    # Parsing

    def parse(self, args, op):
        assert self.validated
        flags, anon_list = self.extract_flags_and_anon(args)
        names = set(flags.keys())
        self.check_value_counts(flags)
        self.check_at_most_one_constraints(names)
        # Transfer args to op
        op_dict = op.__dict__
        for k, v in flags.items():
            arg = self.find_by_name(k)
            op_dict[arg.target] = v
        if self.anon_list_arg:
            op_dict[self.anon_list_arg.target] = anon_list

    # ------------------------------------------------------------------------------------------------------------------

    # Utilities

    def find_flag(self, x):
        if isinstance(x, str):
            for flag in self.flag_args:
                if flag.short == x or flag.long == x:
                    return flag
        return None

    def find_by_name(self, name):
        for flag in self.flag_args:
            if flag.name == name:
                return flag
        if self.anon_list_arg and self.anon_list_arg.name == name:
            return self.anon_list_arg
        return None

    def name_set(self, names):
        name_set = set()
        for name in names:
            assert name in [flag.name for flag in self.flag_args], name
            name_set.add(name)
        assert len(names) == len(name_set)
        return name_set

    # ------------------------------------------------------------------------------------------------------------------

    # Validation steps

    # Check that there is no duplication among all the short and long flags.
    def check_flag_symbols_unique(self):
        flags = set()
        for flag in self.flag_args:
            if flag.short:
                assert flag.short not in flags
                flags.add(flag.short)
            if flag.long:
                assert flag.long not in flags
                flags.add(flag.long)

    # Check that arg names are unique. (They will end up as attributes of an op.)
    def check_arg_names_unique(self):
        names = set()
        for flag in self.flag_args:
            assert flag.name not in names
            names.add(flag.name)
        if self.anon_list_arg:
            assert self.anon_list_arg.name not in names

    # ------------------------------------------------------------------------------------------------------------------

    # Parsing steps

    def extract_flags_and_anon(self, args):
        flags = {}  # arg name -> value
        anon_list = []
        args = iter(args)
        for arg in args:
            flag_arg = self.find_flag(arg)
            if flag_arg is None:
                if anon_list or not Flag.plausible(arg):
                    anon_list.append(self.anon_value(arg))
                    continue
                raise ArgsError(self.op_name, f'Unknown flag {arg}')
            if anon_list:
                raise ArgsError(self.op_name, 'Flags must all appear before the first anonymous arg')
            if flag_arg.name in flags:
                raise ArgsError(self.op_name, f'{arg} specified more than once.')
            if flag_arg.value == VALUE_NONE:
                flags[flag_arg.name] = True
            else:
                # Missing value detected by check_value_counts. A value is taken as is.
                value = next(args, None)
                flags[flag_arg.name] = None if value is None else flag_arg.convert(flag_arg, value)
        return flags, anon_list

    def anon_value(self, x):
        if self.anon_list_arg is None:
            raise ArgsError(self.op_name, 'Too many anonymous args.')
        return self.anon_list_arg.convert(self.anon_list_arg, x)

    # Check that values were supplied exactly when required.
    def check_value_counts(self, flags):
        for flag_name, value in flags.items():
            flag_arg = self.find_by_name(flag_name)
            # We found the flag searching by the short or long form. So lookup by name must work.
            assert flag_arg, flag_name
            if flag_arg.value == VALUE_ONE and value is None:
                raise ArgsError(self.op_name, f'{flag_arg} requires a value.')

    def check_at_most_one_constraints(self, names):
        for group in self.at_most_one_names:
            if len(group.intersection(names)) > 1:
                description = '{' + ', '.join(sorted(str(self.find_by_name(name)) for name in group)) + '}'
                raise ArgsError(self.op_name, f'Cannot specify more than one of {description}')
