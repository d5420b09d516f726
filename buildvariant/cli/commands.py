# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the buildvariant CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code. Library code raises; this is the only layer that catches and maps
exceptions to exit codes.

Logs go to stdout as JSON lines and nothing else is written there. The Gradle
arguments from `resolve --gradle-args-file` go to their own file as a single
shell-quoted line.
"""

import argparse
import logging
import shlex
from pathlib import Path
from typing import Optional

from buildvariant.checks.preflight import run_preflight
from buildvariant.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from buildvariant.config.exceptions import ConfigError
from buildvariant.config.loader import default_config, load_config
from buildvariant.config.schema import BuildVariantConfig
from buildvariant.logging.logger import get_logger
from buildvariant.plan.plan import (
    create_build_plan,
    injected_signing_properties,
    render_gradle_args,
    write_build_plan,
)
from buildvariant.runtime.bootstrap import bootstrap
from buildvariant.signing.credentials import resolve_credentials
from buildvariant.utils.filesystem import atomic_write
from buildvariant.utils.paths import resolve_against
from buildvariant.variants.build_config import build_config_path, write_build_config
from buildvariant.variants.exceptions import DebugSigningNotAllowedError, InvalidVariantError
from buildvariant.variants.policy import VariantPolicy, resolve_policy


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[BuildVariantConfig], logging.Logger]:
    """
    The shared setup that every command needs: load config, run bootstrap.

    Returns a tuple of (exit_code, config, logger). If exit_code is not SUCCESS,
    the caller should return it immediately.
    """
    logger = get_logger(f"buildvariant.cli.{command_name}", log_level=args.log_level or "INFO")

    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger
    else:
        config = default_config()
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": command_name},
        )

    bootstrap(config.global_config, log_level_override=args.log_level)
    return SUCCESS, config, logger


def _project_dir(args: argparse.Namespace) -> Path:
    return Path(args.project_dir).absolute() if args.project_dir else Path.cwd()


def _properties_file(args: argparse.Namespace, config: BuildVariantConfig) -> Path:
    """key.properties location: --properties wins, else config, relative to the project dir."""
    raw = getattr(args, "properties", None) or config.signing.properties_file
    return resolve_against(raw, _project_dir(args))


def _module_dir(args: argparse.Namespace, config: BuildVariantConfig) -> Path:
    """The application module directory; storeFile and ProGuard rules live relative to it."""
    return resolve_against(config.signing.store_file_base, _project_dir(args))


def _resolve(
    args: argparse.Namespace,
    config: BuildVariantConfig,
    logger: logging.Logger,
    allow_debug_signing: bool,
) -> tuple[int, Optional[VariantPolicy]]:
    """
    Load credentials and resolve the policy, mapping failures to exit codes.

    Returns (exit_code, policy). policy is None whenever exit_code is not SUCCESS.
    """
    properties_file = _properties_file(args, config)

    try:
        credentials = resolve_credentials(properties_file)
    except ConfigError as err:
        logger.error(
            "Signing properties are malformed",
            extra={"properties_file": str(properties_file), "error": str(err)},
        )
        return CONFIG_ERROR, None

    try:
        policy = resolve_policy(
            args.variant,
            credentials,
            allow_debug_signing=allow_debug_signing,
            proguard=config.proguard,
        )
    except InvalidVariantError as err:
        logger.error("Invalid build type", extra={"error": str(err)})
        return USER_ERROR, None
    except DebugSigningNotAllowedError as err:
        logger.error(
            "Refusing to debug-sign a release build",
            extra={"variant": args.variant, "error": str(err)},
        )
        return VALIDATION_ERROR, None

    return SUCCESS, policy


def handle_resolve(args: argparse.Namespace) -> int:
    """Resolve a variant into a build plan, optionally writing it and the Gradle args."""
    exit_code, config, logger = _load_and_bootstrap(args, "resolve")
    if exit_code != SUCCESS or config is None:
        return exit_code

    allow = args.allow_debug_signing or config.signing.allow_debug_signing
    exit_code, policy = _resolve(args, config, logger, allow)
    if exit_code != SUCCESS or policy is None:
        return exit_code

    try:
        module_dir = _module_dir(args, config)
        plan = create_build_plan(
            policy,
            android=config.android,
            credentials_file=_properties_file(args, config),
            store_file_base=module_dir,
        )

        logger.info(
            "Resolved build plan",
            extra={
                "variant": plan.variant,
                "signing_source": plan.signing["source"],
                "key_alias": plan.signing["key_alias"],
                "minify": plan.minify,
                "shrink_resources": plan.shrink_resources,
                "debug_logging_enabled": plan.debug_logging_enabled,
                "plan_hash": plan.plan_hash,
            },
        )

        if args.output is not None:
            output = Path(args.output)
            if args.dry_run:
                logger.info("Dry run, would write build plan", extra={"path": str(output)})
            else:
                write_build_plan(plan, output)

        if args.gradle_args_file is not None:
            args_file = Path(args.gradle_args_file)
            if args.dry_run:
                logger.info("Dry run, would write Gradle arguments", extra={"path": str(args_file)})
            else:
                properties = injected_signing_properties(
                    policy, module_dir, reveal_secrets=args.reveal_secrets
                )
                line = " ".join(shlex.quote(a) for a in render_gradle_args(properties))
                # stdout carries the JSON log; secrets go to an owner-only file.
                atomic_write(args_file, line + "\n", mode=0o600)
                logger.info(
                    "Wrote Gradle signing arguments",
                    extra={"path": str(args_file), "secrets_revealed": args.reveal_secrets},
                )

        return SUCCESS

    except Exception as err:
        logger.error("Resolve failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_buildconfig(args: argparse.Namespace) -> int:
    """Write BuildConfig.java for a variant."""
    exit_code, config, logger = _load_and_bootstrap(args, "buildconfig")
    if exit_code != SUCCESS or config is None:
        return exit_code

    if config.android is None:
        logger.error(
            "buildconfig needs an 'android' section in the config",
            extra={"config": args.config},
        )
        return CONFIG_ERROR

    allow = args.allow_debug_signing or config.signing.allow_debug_signing
    exit_code, policy = _resolve(args, config, logger, allow)
    if exit_code != SUCCESS or policy is None:
        return exit_code

    try:
        out_dir = Path(args.out_dir)
        if args.dry_run:
            logger.info(
                "Dry run, would write BuildConfig",
                extra={"path": str(build_config_path(config.android, out_dir))},
            )
            return SUCCESS

        write_build_config(policy, config.android, out_dir)
        return SUCCESS

    except Exception as err:
        logger.error("BuildConfig generation failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_check(args: argparse.Namespace) -> int:
    """
    Run pre-flight checks for a variant.

    Debug signing is allowed while resolving here so that a release without
    credentials still produces a policy to inspect; the release_signing check
    is what fails it.
    """
    exit_code, config, logger = _load_and_bootstrap(args, "check")
    if exit_code != SUCCESS or config is None:
        return exit_code

    exit_code, policy = _resolve(args, config, logger, allow_debug_signing=True)
    if exit_code != SUCCESS or policy is None:
        return exit_code

    try:
        checks = run_preflight(
            policy,
            credentials_file=_properties_file(args, config),
            base_dir=_module_dir(args, config),
        )
        if all(check.passed for check in checks):
            return SUCCESS
        return VALIDATION_ERROR

    except Exception as err:
        logger.error("Pre-flight checks failed to run", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_info(args: argparse.Namespace) -> int:
    """Display environment and effective configuration."""
    exit_code, config, logger = _load_and_bootstrap(args, "info")
    if exit_code != SUCCESS or config is None:
        return exit_code

    from buildvariant import __version__
    from buildvariant.runtime.environment import get_system_info

    system_info = get_system_info()

    logger.info(
        "System information",
        extra={
            "buildvariant_version": __version__,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "hostname": system_info.hostname,
            "project_dir": str(_project_dir(args)),
            "config": args.config,
            "effective_config": config.model_dump(mode="json", by_alias=True),
        },
    )
    return SUCCESS
