import argparse
import json
import sys

from soapsource.connections import test_connection as test_source_connection
from soapsource.connections.sources.exceptions import SOAPSourceError
from soapsource.connections.sources.factory import create_connector, load_connector_config


def _load_config(path):
    try:
        return load_connector_config(path)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None


def cmd_test_connection(args):
    """Handle test-connection subcommand."""
    config = _load_config(args.config)
    if config is None:
        return 1

    protocol = config.get("protocol", "soap")
    label = f"Source ({protocol}) from {args.config}"
    try:
        success = test_source_connection(protocol, config=config)
    except (SOAPSourceError, ValueError) as e:
        print(f"Error testing connection: {e}", file=sys.stderr)
        success = False

    print(json.dumps({"success": success, "label": label}))

    if success:
        print(f"Connection to {label} successful.", file=sys.stderr)
        return 0
    print(f"Connection to {label} failed.", file=sys.stderr)
    return 1


def cmd_list_sources(args):
    """Handle list-sources subcommand."""
    config = _load_config(args.config)
    if config is None:
        return 1

    try:
        source = create_connector(config)
    except (SOAPSourceError, ValueError) as e:
        print(f"Could not open data source: {e}", file=sys.stderr)
        return 1

    try:
        print(json.dumps(source.list_sources()))
    finally:
        source.close()
    return 0


def cmd_query(args):
    """Handle query subcommand."""
    config = _load_config(args.config)
    if config is None:
        return 1

    try:
        payload = json.loads(args.payload)
    except json.JSONDecodeError as e:
        print(f"Payload must be valid JSON: {e}", file=sys.stderr)
        return 1

    try:
        source = create_connector(config)
    except (SOAPSourceError, ValueError) as e:
        print(f"Could not open data source: {e}", file=sys.stderr)
        return 1

    try:
        result = source.query(args.method, payload, args.transaction_command)
    finally:
        source.close()

    print(result.model_dump_json())

    if result.success:
        print(f"Query {args.method} succeeded.", file=sys.stderr)
        return 0
    print(f"Query {args.method} failed: {result.error_message}", file=sys.stderr)
    return 1


def main(argv=None):
    parser = argparse.ArgumentParser(description="SOAP data source CLI")
    subparsers = parser.add_subparsers(dest="command", help="Subcommand to run")

    # Test-connection command
    test_parser = subparsers.add_parser("test-connection", help="Test a SOAP source connection")
    test_parser.add_argument("--config", required=True, help="Path to source JSON/YAML config")

    # List-sources command
    list_parser = subparsers.add_parser("list-sources", help="List the operations exposed by the WSDL")
    list_parser.add_argument("--config", required=True, help="Path to source JSON/YAML config")

    # Query command
    query_parser = subparsers.add_parser("query", help="Call one SOAP operation")
    query_parser.add_argument("--config", required=True, help="Path to source JSON/YAML config")
    query_parser.add_argument("--method", required=True, help="SOAP operation name")
    query_parser.add_argument("--payload", required=True, help="JSON payload for the transaction command")
    query_parser.add_argument("--command", dest="transaction_command", default=None, help="Transaction command key")

    args = parser.parse_args(argv)

    if args.command == "test-connection":
        sys.exit(cmd_test_connection(args))
    elif args.command == "list-sources":
        sys.exit(cmd_list_sources(args))
    elif args.command == "query":
        sys.exit(cmd_query(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
