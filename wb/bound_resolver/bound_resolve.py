import argparse
import json
import logging
import sys
from typing import Dict, List, Tuple

from wb.bound_resolver.dial_config import (
    CONFIG_FILE,
    DialConfig,
    DialConfigFile,
    ImproperlyConfigured,
    read_config_json,
)
from wb.bound_resolver.errors import DomainNameResolveException
from wb.bound_resolver.lookup_ip import lookup_ip

EXIT_RESOLVE_FAILED = 1
EXIT_NOT_CONFIGURED = 6

LOGGING_FORMAT = "%(message)s"


def init_logging(debug: bool):
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=log_level, format=LOGGING_FORMAT)


def apply_args(cfg: Dict, args) -> Dict:
    cfg = dict(cfg)
    if args.iface is not None:
        cfg["bind_to_device"] = args.iface
    if args.dns_server is not None:
        cfg["dns_server"] = args.dns_server
    if args.timeout is not None:
        cfg["connect_timeout_s"] = args.timeout
    if args.debug:
        cfg["debug"] = True
    return cfg


def resolve_hosts(hosts: List[str], config: DialConfig) -> Tuple[Dict[str, List[str]], bool]:
    res = {}
    ok = True
    for host in hosts:
        try:
            res[host] = lookup_ip(host, config)
        except DomainNameResolveException as ex:
            logging.error("%s", ex)
            ok = False
    return res, ok


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve host names via a DNS server reachable through a given interface",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("hosts", nargs="+", help="Host names to resolve")
    parser.add_argument("-c", "--config", type=str, default=CONFIG_FILE, help="Config file")
    parser.add_argument("--iface", type=str, default=None, help="Interface to send DNS queries through")
    parser.add_argument("--dns-server", type=str, default=None, help="DNS server IPv4 address")
    parser.add_argument("--timeout", type=float, default=None, help="Query timeout in seconds")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--indent", type=int, default=2, help="Indentation level for JSON output")
    args = parser.parse_args(argv)

    cfg_json = {}
    try:
        cfg_json = read_config_json(args.config)
    except FileNotFoundError:
        pass
    except (PermissionError, OSError, json.decoder.JSONDecodeError) as ex:
        logging.error("Loading %s failed: %s", args.config, ex)
        return EXIT_NOT_CONFIGURED
    cfg_json = apply_args(cfg_json, args)

    init_logging(cfg_json.get("debug", False))

    try:
        config_file = DialConfigFile()
        config_file.load_config(cfg=cfg_json)
    except ImproperlyConfigured as ex:
        logging.error("Configuration error: %s", ex)
        return EXIT_NOT_CONFIGURED

    res, ok = resolve_hosts(args.hosts, config_file.get_dial_config())
    json.dump(res, sys.stdout, sort_keys=True, indent=args.indent)
    return 0 if ok else EXIT_RESOLVE_FAILED


if __name__ == "__main__":
    sys.exit(main())  # pragma: no cover
