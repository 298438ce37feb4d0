#!/usr/bin/env python3
"""
Print the RPC method table, or call one method.

Usage:
    python -m scriptlayer                       # platform version from env
    python -m scriptlayer --platform-version 7
    python -m scriptlayer --json
    python -m scriptlayer --method contactsGetById
    python -m scriptlayer --call contactsGetById --params '[1]'   # uses SCRIPTLAYER_CONTENT_DB
"""

import argparse
import json
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from scriptlayer.config import ConfigProvider, EnvConfigProvider, RegistryConfig, parse_collision_policy, parse_platform_version
from scriptlayer.logging_config import configure_logging
from scriptlayer.modules.dispatch import FacadeManager
from scriptlayer.modules.facades import PlatformContext
from scriptlayer.modules.registry import FacadeConfiguration
from scriptlayer.modules.rpc import RpcError

console = Console()


def build_table(configuration: FacadeConfiguration) -> Table:
    """Render descriptors as a rich table."""
    table = Table(title=f"RPC Methods (platform version {configuration.platform_version})")
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Facade", style="magenta")
    table.add_column("Parameters")
    table.add_column("Description")

    for descriptor in configuration.list_descriptors():
        params = ", ".join(
            f"{p.name}?" if p.optional else p.name for p in descriptor.parameters
        )
        table.add_row(descriptor.name, descriptor.receiver_name, params, descriptor.description)
    return table


def call_method(
    configuration: FacadeConfiguration, provider: ConfigProvider, method: str, raw_params: str
) -> int:
    """Invoke one method in a throwaway session and print the response object."""
    try:
        params = json.loads(raw_params)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid --params:[/red] {e}")
        return 1

    context = PlatformContext.from_config(provider)
    try:
        with FacadeManager(configuration, context) as manager:
            response = manager.handle({"id": 1, "method": method, "params": params})
    finally:
        if context.content_resolver is not None:
            context.content_resolver.close()

    print(json.dumps(response, indent=2))
    return 0 if response["error"] is None else 1


def main(argv: Optional[List[str]] = None) -> int:
    provider = EnvConfigProvider()

    parser = argparse.ArgumentParser(description="List the RPC methods exposed by scriptlayer facades")
    parser.add_argument("--platform-version", help="Platform (SDK) version; defaults to SCRIPTLAYER_PLATFORM_VERSION")
    parser.add_argument("--collision-policy", choices=["override", "reject"], help="Name collision policy")
    parser.add_argument("--method", help="Show help for a single method")
    parser.add_argument("--json", action="store_true", help="Print descriptors as JSON")
    parser.add_argument("--call", metavar="METHOD", help="Invoke a method against the configured content database")
    parser.add_argument("--params", default="[]", help="JSON list or object of parameters for --call")
    parser.add_argument("--log-level", default=provider.get_log_level(), help="Logging level")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    config = provider.get_registry_config()
    config = RegistryConfig(
        platform_version=(
            parse_platform_version(args.platform_version)
            if args.platform_version is not None
            else config.platform_version
        ),
        collision_policy=(
            parse_collision_policy(args.collision_policy)
            if args.collision_policy
            else config.collision_policy
        ),
    )

    try:
        configuration = FacadeConfiguration(config).initialize()
    except RpcError as e:
        console.print(f"[red]Registry build failed:[/red] {e.message}")
        return 1

    if args.call:
        return call_method(configuration, provider, args.call, args.params)

    if args.method:
        descriptor = configuration.lookup(args.method)
        if descriptor is None:
            console.print(f"[red]Method '{args.method}' not found[/red]")
            return 1
        if args.json:
            print(json.dumps(descriptor.to_dict(), indent=2))
        else:
            console.print(descriptor.help(), markup=False)
        return 0

    if args.json:
        print(json.dumps([d.to_dict() for d in configuration.list_descriptors()], indent=2))
    else:
        console.print(build_table(configuration))
        console.print(
            f"\n[bold]{len(configuration)} methods from "
            f"{len(configuration.provider_types())} facades[/bold]"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
