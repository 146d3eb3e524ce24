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

import sys

import numseq.argsparser
import numseq.cancel
import numseq.env
import numseq.exception
import numseq.opmodule
import numseq.util
import numseq.version

OP_NAME = 'seq'
SUCCESS = 0
FAILURE = 1


def usage(env):
    help_text = env.op_modules[OP_NAME].help()
    synopsis = next(line for line in help_text.split('\n') if line.strip())
    return f'usage: {synopsis}'


def run_command(env, args):
    if args[:1] in (['-h'], ['--help']):
        print(env.op_modules[OP_NAME].help().strip('\n'), file=env.stdout)
        return SUCCESS
    if args[:1] == ['--version']:
        print(f'{OP_NAME} {numseq.version.VERSION}', file=env.stdout)
        return SUCCESS
    try:
        op = numseq.opmodule.parse_op(env, OP_NAME, args)
        with numseq.cancel.SigintCanceller(env.cancel):
            op.execute(env)
        return SUCCESS
    except numseq.argsparser.ArgsError as e:
        numseq.util.print_to_stderr(str(e), env.stderr)
        numseq.util.print_to_stderr(usage(env), env.stderr)
    except numseq.exception.KillCommandException as e:
        numseq.util.print_to_stderr(f'{OP_NAME}: {e}', env.stderr)
    return FAILURE


def main(argv=None, stdout=None, stderr=None, environ=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        env = numseq.env.Environment.create(stdout=stdout, stderr=stderr, environ=environ)
    except numseq.exception.KillCommandException as e:
        numseq.util.print_to_stderr(f'{OP_NAME}: {e}', stderr)
        return FAILURE
    try:
        return run_command(env, list(argv))
    finally:
        env.trace.disable()


if __name__ == '__main__':
    sys.exit(main())
