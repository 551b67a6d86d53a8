"""
定投计划配置 CLI。

职责：
- preview：预览某周期/扣款日组合的首次扣款日期
- configure：按参数（可选从已保存 JSON 回填）生成定投计划，输出 JSON

使用方式：
    python -m src.cli.dca_plan preview --cycle weekly --weekly-day 5
    python -m src.cli.dca_plan configure --fund 000001 --fund-name 华夏成长 --amount 500 --cycle monthly --monthly-day 10
    python -m src.cli.dca_plan configure --from-json plan.json --monthly-day 15 --output plan.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime, time, tzinfo
from decimal import Decimal
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.core.config import is_debug
from src.core.container import get_tz_resolver
from src.core.log import log
from src.core.models import (
    CYCLE_LABELS,
    CYCLES,
    SCHEDULE_HINT,
    DcaDraft,
    DcaPlan,
    FundRef,
    describe_rule,
)
from src.core.timezone import TimezoneResolver
from src.flows.dca import open_dca_form, preview_first_date
from src.schemas import SavedPlanPayload

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"日期格式应为 YYYY-MM-DD：{value}") from err


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.dca_plan",
        description="定投计划配置",
    )
    parser.add_argument("--debug", action="store_true", help="启用调试日志")
    subparsers = parser.add_subparsers(dest="command", required=True, help="子命令")

    # ========== preview 子命令 ==========
    preview_parser = subparsers.add_parser("preview", help="预览首次扣款日期")
    preview_parser.add_argument("--cycle", required=True, choices=CYCLES, help="定投周期")
    preview_parser.add_argument("--weekly-day", type=int, default=None, help="扣款星期（1=周一..5=周五）")
    preview_parser.add_argument("--monthly-day", type=int, default=None, help="每月扣款日（1..28）")
    preview_parser.add_argument("--today", type=_iso_date, default=None, help="指定今天（YYYY-MM-DD）")

    # ========== configure 子命令 ==========
    configure_parser = subparsers.add_parser("configure", help="生成或编辑定投计划")
    configure_parser.add_argument("--from-json", type=Path, default=None, help="已保存计划 JSON（编辑模式）")
    configure_parser.add_argument("--fund", default=None, help="基金代码（编辑模式可从 JSON 读取）")
    configure_parser.add_argument("--fund-name", default=None, help="基金名称")
    configure_parser.add_argument("--amount", default=None, help="每次定投金额")
    configure_parser.add_argument("--fee-rate", default=None, help="买入费率（%%）")
    configure_parser.add_argument("--cycle", choices=CYCLES, default=None, help="定投周期")
    configure_parser.add_argument("--weekly-day", type=int, default=None, help="扣款星期（1..5）")
    configure_parser.add_argument("--monthly-day", type=int, default=None, help="每月扣款日（1..28）")
    enabled_group = configure_parser.add_mutually_exclusive_group()
    enabled_group.add_argument("--enabled", dest="enabled", action="store_true", default=None, help="启用定投")
    enabled_group.add_argument("--disabled", dest="enabled", action="store_false", help="暂不启用")
    configure_parser.add_argument("--today", type=_iso_date, default=None, help="指定今天（YYYY-MM-DD）")
    configure_parser.add_argument("--output", type=Path, default=None, help="输出文件（默认打印到 stdout）")

    return parser.parse_args(argv)


def _resolver_for(today: date | None) -> TimezoneResolver:
    """未指定 --today 时使用容器单例；指定时用固定时钟。"""
    if today is None:
        return get_tz_resolver()

    def clock(tz: tzinfo) -> datetime:
        return datetime.combine(today, time(), tzinfo=tz)

    return TimezoneResolver(get_tz_resolver().zone_name, clock=clock)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"无法序列化：{type(value).__name__}")


def _render_draft(fund: FundRef, draft: DcaDraft, reason: str | None) -> None:
    """用 Rich 表格展示当前草稿。"""
    table = Table(show_header=False, box=None)
    table.add_column(style="dim")
    table.add_column()
    table.add_row("基金", f"{fund.name} #{fund.code}" if fund.name else f"#{fund.code}")
    table.add_row("定投金额 (¥)", draft.amount or "—")
    table.add_row("买入费率 (%)", draft.fee_rate or "—")
    table.add_row("定投周期", describe_rule(draft.cycle, draft.weekly_day, draft.monthly_day))
    table.add_row("首次扣款日期", draft.first_date.isoformat() if draft.first_date else "—")
    table.add_row("是否启用", "已启用" if draft.enabled else "未启用")

    ok = reason is None
    status = "[green]可保存[/]" if ok else f"[red]不可保存：{reason}[/]"
    console.print(Panel(table, title=f"🔁 定投  |  {status}", border_style="blue" if ok else "red"))


def _do_preview(args: argparse.Namespace) -> int:
    """执行 preview 命令。"""
    try:
        resolver = _resolver_for(args.today)
        first = preview_first_date(
            cycle=args.cycle,
            weekly_day=args.weekly_day,
            monthly_day=args.monthly_day,
            tz_resolver=resolver,
        )
        rule = describe_rule(args.cycle, args.weekly_day, args.monthly_day)
        log(f"[DCA:preview] 今天 {resolver.today()}（{resolver.zone_name}），规则：{rule}")
        log(f"首次扣款日期：{first.isoformat()}")
        log(f"* {SCHEDULE_HINT}")
        return 0
    except Exception as err:  # noqa: BLE001
        log(f"❌ 预览失败：{err}")
        return 5


def _load_saved(path: Path) -> SavedPlanPayload:
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"计划文件应为 JSON 对象：{path}")
    return SavedPlanPayload.model_validate(data)


def _do_configure(args: argparse.Namespace) -> int:
    """执行 configure 命令。"""
    try:
        # 1. 读取已保存计划（编辑模式）
        saved = _load_saved(args.from_json) if args.from_json else None
        fund_code = args.fund or (saved.fund_code if saved else None)
        if not fund_code:
            log("❌ 必须提供 --fund，或在 --from-json 中包含 fundCode")
            return 1
        fund_name = args.fund_name or (saved.fund_name if saved else None) or ""
        fund = FundRef(code=fund_code, name=fund_name)

        # 2. 打开表单并应用参数（先周期，后扣款日）
        emitted: list[DcaPlan] = []
        form = open_dca_form(
            fund=fund,
            plan=saved,
            on_confirm=emitted.append,
            tz_resolver=_resolver_for(args.today),
        )
        if args.amount is not None:
            form.set_amount(args.amount)
        if args.fee_rate is not None:
            form.set_fee_rate(args.fee_rate)
        if args.cycle is not None:
            form.set_cycle(args.cycle)
        if args.weekly_day is not None:
            form.set_weekly_day(args.weekly_day)
        if args.monthly_day is not None:
            form.set_monthly_day(args.monthly_day)
        if args.enabled is not None:
            form.set_enabled(args.enabled)

        # 3. 展示并确认
        result = form.validate()
        _render_draft(fund, form.draft, result.reason)
        plan = form.confirm()
        if plan is None:
            log(f"❌ 定投计划无效：{result.reason}")
            return 4

        # 4. 输出计划
        text = json.dumps(emitted[0].to_payload(), ensure_ascii=False, indent=2, default=_json_default)
        if args.output:
            args.output.write_text(text + "\n", encoding="utf-8")
            log(f"✅ 定投计划已写入 {args.output}（{CYCLE_LABELS[plan.cycle]}，首扣 {plan.first_date}）")
        else:
            print(text)
        return 0
    except (OSError, ValueError) as err:
        log(f"❌ 生成定投计划失败：{err}")
        return 5
    except Exception as err:  # noqa: BLE001
        logger.exception("[DCA:configure] 未预期的错误")
        log(f"❌ 生成定投计划失败：{err}")
        return 5


def main(argv: list[str] | None = None) -> int:
    """
    定投计划配置 CLI。

    Returns:
        退出码：0=成功；1=参数缺失；4=计划校验未通过；5=其他失败。
    """
    load_dotenv()

    # 1. 解析参数
    args = _parse_args(argv)

    if args.debug or is_debug():
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    # 2. 路由到子命令
    if args.command == "preview":
        return _do_preview(args)
    elif args.command == "configure":
        return _do_configure(args)
    else:
        log(f"❌ 未知命令：{args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
