import rich
from rich.pretty import pprint

from argosy import *


def encode(parser, namespace, leftovers, fault):
    """Generate JSON Web Tokens"""
    if isinstance(fault, ParserSignal):
        return
    if fault is not None:
        return parser.trigger(fault)

    pprint(namespace)
    rich.print("secret:", namespace.string("secret"))
    if leftovers:
        rich.print("unused args:", leftovers)


def root(parser, namespace, leftovers, fault):
    if isinstance(fault, ParserSignal):
        return
    if fault is not None:
        return parser.trigger(fault)
    pprint(namespace)


jwt = Parser("Generate or validate JSON Web Tokens (JWTs)", version="1.0.0", callback=root, shell=True)
jwt.add_help().add_version()

enc = parser(encode).add_help()
enc.add(
    option("s secret", required=True, descr="secret used for generating the signature"),
    option("d data", action=Action.APPEND, descr="key=value pairs to include in the token payload"),
)
jwt.add_parser("enc", enc)


if __name__ == '__main__':
    invoke(jwt)
