#!/usr/bin/env python3

"""Entry point for the Kaitai Struct Language Server."""

from kaitai_struct_designer.config import designer_config

from .base_server import KsyLanguageServer


def main():
    designer_config.set_server_logging()
    server = KsyLanguageServer()
    server.start()


if __name__ == '__main__':
    main()
