from __future__ import annotations

"""CLI for RelationTrainer using SessionController and the mode registry."""

import argparse
import time
from pathlib import Path
from typing import Any, Dict

import yaml

from ..analytics.report import build_report
from ..config.config import SessionConfig, load_config, session_config_from, validate_config
from ..phases import Phase
from ..results.persist import apply_settings, load_settings, save_settings
from ..stats.stats import format_summary
from ..storage.store import export_ndjson, load_history, query_trend, store_record
from ..util.randomness import make_rng
from .mode_registry import get_mode, list_modes
from .presets import PRESETS, apply_preset
from .session_controller import SessionController, SessionSnapshot
from .trial_generator import TrialGenerator


def _build_config(args: argparse.Namespace) -> tuple[SessionConfig, Dict[str, Any]]:
    cfg = validate_config(load_config(args.config))
    config = session_config_from(cfg)
    if getattr(args, "use_saved", False):
        config = apply_settings(config, load_settings(cfg["storage"]["settings_path"]))
    if args.preset:
        config = apply_preset(config, args.preset)
    if getattr(args, "seed", None) is not None:
        config = config.with_overrides({"seed": args.seed})
    return config, cfg


def _print_trial(snap: SessionSnapshot) -> None:
    trial = snap.trial
    if trial is None:
        return
    if snap.premises_visible:
        for p in trial.premises:
            print(f"  {p.text}")
    else:
        print("  (premises hidden)")
    if trial.question.narrative and snap.question_visible:
        for line in trial.question.narrative:
            print(f"  {line}")


def _print_keys(snap: SessionSnapshot) -> None:
    if snap.trial is not None and snap.trial.key_changed and snap.cipher_keys:
        print("New cipher key:")
        for keyword, token in snap.cipher_keys:
            print(f"  {token} = {keyword}")


def _wait_for_question(ctrl: SessionController) -> None:
    # a hit moves on after a short delay; keep firing timers until it does
    while ctrl.phase == Phase.INTERFERENCE:
        time.sleep(0.05)
        ctrl.pump()


def _run_session(ctrl: SessionController) -> int:
    if not ctrl.start_session():
        return 1
    record = None
    while ctrl.phase not in (Phase.SESSION_END, Phase.SETUP):
        ctrl.pump()
        snap = ctrl.snapshot()
        header = f"[round {ctrl.state.round} | depth {snap.depth} | score {snap.score}"
        if snap.remaining_s is not None:
            header += f" | {snap.remaining_s}s left"
        header += "]"

        if snap.phase == Phase.PREMISE_MEMORIZE:
            print(header)
            _print_keys(snap)
            _print_trial(snap)
            if input("Memorize, then press Enter (q to quit): ").strip().lower() == "q":
                ctrl.abort()
                break
            ctrl.pump()
            if ctrl.phase == Phase.PREMISE_MEMORIZE:
                ctrl.finish_memorization()

        elif snap.phase == Phase.INTERFERENCE:
            state = snap.interference
            assert state is not None
            print(f"Target colour: {state.target} | now showing: {state.current}")
            if input("Press Enter when they match (q to quit): ").strip().lower() == "q":
                ctrl.abort()
                break
            ctrl.pump()
            if ctrl.phase != Phase.INTERFERENCE:
                continue
            if ctrl.acknowledge_interference():
                print("Hit!")
                _wait_for_question(ctrl)
            else:
                print("Miss.")

        elif snap.phase == Phase.QUESTION:
            print(header)
            _print_trial(snap)
            print(f"Q: {snap.trial.question.text}")
            if snap.question_remaining_s is not None:
                print(f"  ({snap.question_remaining_s}s to answer)")
            ans = input("Answer y/n (q to quit): ").strip().lower()
            if ans == "q":
                ctrl.abort()
                break
            ctrl.pump()
            if ctrl.phase != Phase.QUESTION:
                continue
            if ans in ("y", "yes", "n", "no"):
                ctrl.answer(ans.startswith("y"))

        elif snap.phase == Phase.RESULT:
            fb = snap.feedback
            if fb is not None:
                if fb.timed_out:
                    print("Time is up for this question.")
                else:
                    print("Correct!" if fb.correct else "Wrong.")
                print(f"  Expected: {'yes' if fb.expected else 'no'}")
            if snap.time_up:
                print("Session time is up.")
            choice = input("Enter for next round, e to end, q to quit: ").strip().lower()
            if choice == "q":
                ctrl.abort()
                break
            if choice == "e":
                record = ctrl.end_session()
            elif not ctrl.next_round() and ctrl.phase == Phase.SESSION_END:
                record = ctrl.history[-1]

    if record is not None:
        print("\nSession Summary:")
        print(format_summary(record))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="relationtrainer")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list-modes")

    sc = sub.add_parser("show-config")
    sc.add_argument("--config", default=None)
    sc.add_argument("--preset", default=None, choices=sorted(PRESETS))

    sp = sub.add_parser("sample")
    sp.add_argument("--config", default=None)
    sp.add_argument("--preset", default=None, choices=sorted(PRESETS))
    sp.add_argument("--mode", default=None, help="Restrict to one mode id")
    sp.add_argument("--depth", type=int, default=None)
    sp.add_argument("--count", type=int, default=1)
    sp.add_argument("--seed", type=int, default=None)
    sp.add_argument("--explain", action="store_true")

    rp = sub.add_parser("run")
    rp.add_argument("--config", default=None)
    rp.add_argument("--preset", default=None, choices=sorted(PRESETS))
    rp.add_argument("--seed", type=int, default=None)
    rp.add_argument("--explain", action="store_true")
    rp.add_argument("--no-save", dest="save", action="store_false", help="Do not record history or settings")
    rp.add_argument("--fresh", dest="use_saved", action="store_false", help="Ignore saved settings")
    rp.set_defaults(save=True, use_saved=True)

    hp = sub.add_parser("history")
    hp.add_argument("--config", default=None)
    hp.add_argument("--last", type=int, default=None)
    hp.add_argument("--export", default=None, help="Write history as NDJSON to this path")

    rep = sub.add_parser("report")
    rep.add_argument("--config", default=None)
    rep.add_argument("--out", default="reports")

    args = p.parse_args(argv)

    if args.cmd == "list-modes":
        for m in list_modes():
            extras = [name for name, on in (("deictic", m.supports_deictic), ("movement", m.supports_movement)) if on]
            suffix = f" | supports: {', '.join(extras)}" if extras else ""
            print(f"{m.id}: {m.name} - {m.description}{suffix}")
        return 0

    if args.cmd == "show-config":
        config, _ = _build_config(args)
        print(yaml.safe_dump(config.to_dict(), sort_keys=False), end="")
        return 0

    if args.cmd == "sample":
        if args.explain:
            from .explain import enable as explain_enable
            explain_enable(True)
        config, _ = _build_config(args)
        if args.mode is not None:
            get_mode(args.mode)
            config = config.with_overrides({"enabled_modes": [args.mode]})
        depth = args.depth if args.depth is not None else config.depth
        gen = TrialGenerator(make_rng(config.seed))
        gen.start_session(config)
        for i in range(max(0, args.count)):
            trial = gen.generate(config, depth, first_round=i == 0)
            tags = f" [{', '.join(trial.modifiers)}]" if trial.modifiers else ""
            print(f"#{i + 1} {trial.mode.value} depth={trial.depth}{tags}")
            if trial.key_changed:
                for keyword, token in trial.cipher_keys:
                    print(f"  key: {token} = {keyword}")
            for prem in trial.premises:
                print(f"  {prem.text}")
            for line in trial.question.narrative:
                print(f"  {line}")
            print(f"  Q: {trial.question.text}")
            print(f"  A: {'yes' if trial.answer else 'no'}")
        return 0

    if args.cmd == "run":
        if args.explain:
            from .explain import enable as explain_enable
            explain_enable(True)
        config, cfg = _build_config(args)
        history_dir = Path(cfg["storage"]["history_dir"])
        sink = (lambda record: store_record(record, history_dir)) if args.save else None
        ctrl = SessionController(config, rng=make_rng(config.seed), history_sink=sink)
        ctrl.bus.subscribe("notice", lambda msg: print(f"NOTICE: {msg}"))
        code = _run_session(ctrl)
        if args.save:
            save_settings(cfg["storage"]["settings_path"], ctrl.config)
        return code

    if args.cmd == "history":
        cfg = validate_config(load_config(args.config))
        df = load_history(Path(cfg["storage"]["history_dir"]))
        if df.empty:
            print("No session history yet.")
            return 0
        trend = query_trend(df, last_n=args.last)
        for row in trend.itertuples(index=False):
            print(f"{row.date}  accuracy {float(row.accuracy):5.1f}%  score {int(row.score)}")
        if args.export:
            export_ndjson(df, Path(args.export))
            print(f"Exported {len(df)} sessions to {args.export}")
        return 0

    if args.cmd == "report":
        cfg = validate_config(load_config(args.config))
        count = build_report(Path(cfg["storage"]["history_dir"]), Path(args.out))
        if count == 0:
            print("No session history found.")
            return 2
        print(f"Reports for {count} sessions saved to: {Path(args.out).resolve()}")
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
