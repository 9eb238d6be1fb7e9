"""CLI — 安装 / 列出依赖"""

from __future__ import annotations

import click

from depforge.core.config import Config, init_config
from depforge.core.exceptions import DepForgeError
from depforge.core.manifest import load_manifest
from depforge.services.orchestrator import Orchestrator


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(list_deps)


def _fail(e: DepForgeError) -> click.ClickException:
    lines = [f"{e.code}: {e}"]
    lines.extend(f"  - {d}" for d in getattr(e, "details", []))
    return click.ClickException("\n".join(lines))


def _load_config(config: str, vendor: str | None, groups: tuple[str, ...]) -> Config:
    cfg = init_config(config)
    if vendor:
        cfg.vendor_dir = vendor
    if groups:
        cfg.active_groups = list(groups)
    return cfg


@click.command(context_settings={"ignore_unknown_options": True})
@click.option("--manifest", "-m", default=None, help="依赖清单路径（默认取配置 manifest）")
@click.option("--config", "-c", default="depforge.yml", help="配置文件路径")
@click.option("--vendor", default=None, help="工作空间根目录")
@click.option("--group", "-g", "groups", multiple=True, help="激活的 group（可多次指定）")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def install(
    manifest: str | None, config: str, vendor: str | None,
    groups: tuple[str, ...], args: tuple[str, ...],
) -> None:
    """拉取、固定版本并构建清单中的依赖，ARGS 原样转发给拉取 / 构建命令"""
    try:
        cfg = _load_config(config, vendor, groups)
        deps = load_manifest(manifest or cfg.manifest)
        done = Orchestrator(cfg).install(deps, list(args))
    except DepForgeError as e:
        raise _fail(e) from e
    click.echo(f"已安装 {len(done)} 个依赖")


@click.command(name="list")
@click.option("--manifest", "-m", default=None, help="依赖清单路径（默认取配置 manifest）")
@click.option("--config", "-c", default="depforge.yml", help="配置文件路径")
@click.option("--group", "-g", "groups", multiple=True, help="激活的 group（可多次指定）")
def list_deps(manifest: str | None, config: str, groups: tuple[str, ...]) -> None:
    """列出过滤后将被安装的依赖"""
    try:
        cfg = _load_config(config, None, groups)
        deps = load_manifest(manifest or cfg.manifest)
    except DepForgeError as e:
        raise _fail(e) from e

    selected = Orchestrator(cfg).select(deps)
    if not selected:
        click.echo("没有需要安装的依赖。")
        return
    for dep in selected:
        rev = dep.revision or "-"
        fork = f" fork={dep.fork}" if dep.has_fork else ""
        click.echo(f"  {dep.target:40s} {rev:12s}{fork}")
