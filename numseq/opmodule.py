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

import importlib
import inspect

import numseq.argsparser
import numseq.core
import numseq.op


class OpModule:

    def __init__(self, op_name):
        self._op_name = op_name
        self._api = None  # For creating op instances from the api
        self._op_constructor = None
        self._args_parser = None
        self._args_parser_constructor = None
        self._help = None
        op_module = importlib.import_module(f'numseq.op.{op_name}')
        # Locate items in module needed during the lifecycle of an op.
        for k, v in op_module.__dict__.items():
            if k == op_name:
                self._api = v
            elif k == 'HELP':
                self._help = v
            elif inspect.isclass(v):
                parents = inspect.getmro(v)
                if numseq.core.Op in parents:
                    if op_name == v.__name__.lower():
                        self._op_constructor = v
                elif numseq.argsparser.ArgsParser in parents and v is not numseq.argsparser.ArgsParser:
                    # E.g. SeqArgsParser
                    self._args_parser_constructor = v
        assert self._op_constructor is not None, op_name
        assert self._args_parser_constructor is not None, op_name

    def api_function(self):
        return self._api

    def create_op(self):
        return self._op_constructor()

    def args_parser(self, env):
        if self._args_parser is None:
            self._args_parser = self._args_parser_constructor(env)
        return self._args_parser

    def help(self):
        return self._help


def import_op_modules():
    op_modules = {}
    for op_name in numseq.op.all:
        op_modules[op_name] = OpModule(op_name)
    return op_modules


# Create an op from api-style arguments, e.g. create_op(env, 'seq', 1, 10, separator=',')
def create_op(env, op_name, *op_args, **op_kwargs):
    op_module = env.op_modules[op_name]
    op, args = op_module.api_function()(*op_args, **op_kwargs)
    op_module.args_parser(env).parse(args, op)
    return op


# Create an op from console-style arguments, e.g. parse_op(env, 'seq', ['-s', ',', '1', '10'])
def parse_op(env, op_name, args):
    op_module = env.op_modules[op_name]
    op = op_module.create_op()
    op_module.args_parser(env).parse(args, op)
    return op
