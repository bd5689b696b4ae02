#!/usr/bin/env python3
"""
Ponto de entrada do interpretador: REPL no terminal ou servidor da API.
"""
import argparse
import logging
import os
import sys
import webbrowser
from threading import Timer

from session import BasicSession, repl

def open_browser(url):
    """Abre o navegador após um pequeno delay"""
    webbrowser.open(url)

def build_arg_parser():
    parser = argparse.ArgumentParser(description="Interpretador de BASIC mínimo")
    parser.add_argument("mode", nargs="?", choices=("repl", "serve"), default="repl")
    parser.add_argument("--host", default=os.environ.get("BASIC_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("BASIC_PORT", "8000")))
    parser.add_argument("--log-level", default=os.environ.get("BASIC_LOG_LEVEL", "WARNING"),
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    parser.add_argument("--open-browser", action="store_true",
                        help="abre a documentação da API no navegador (modo serve)")
    return parser

def serve(args):
    import uvicorn

    if args.open_browser:
        Timer(2.0, open_browser, args=(f"http://{args.host}:{args.port}/docs",)).start()
    uvicorn.run("main:app", host=args.host, port=args.port, log_level=args.log_level.lower())

def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, stream=sys.stderr,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.mode == "serve":
        serve(args)
    else:
        repl(BasicSession())
    return 0

if __name__ == "__main__":
    sys.exit(main())
