from __future__ import annotations

import os
import subprocess
import sys
from typing import List

from manim import (
    UP,
    FadeIn,
    MathTex,
    Scene,
    Text,
    Transform,
    config,
)

from stepalgebra.expression import Expression, ShapeError
from stepalgebra.pipeline import Stage, worked_stages

EXPR_ENV = "STEPALGEBRA_EXPR"
RUN_TIME_ENV = "STEPALGEBRA_RUN_TIME"
FINAL_WAIT_ENV = "STEPALGEBRA_FINAL_WAIT"
DEFAULT_EXPR = "[(None, [(None, 'x'), ('add', 3)]), ('multiply', [(None, 4), ('subtract', 'x')])]"
DEFAULT_RUN_TIME = 1.2
DEFAULT_FINAL_WAIT = 2.0


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else default


def load_stages(text: str) -> List[Stage]:
    return worked_stages(Expression.from_literal(text))


class StagesScene(Scene):
    def construct(self) -> None:
        expr = os.environ.get(EXPR_ENV, DEFAULT_EXPR)
        anim_run_time = _env_float(RUN_TIME_ENV, DEFAULT_RUN_TIME)
        final_wait = _env_float(FINAL_WAIT_ENV, DEFAULT_FINAL_WAIT)

        try:
            stages = load_stages(expr)
        except ShapeError as exc:
            error = Text(f"Shape error: {exc}", font="Noto Sans")
            self._fit_to_frame(error)
            self.play(FadeIn(error), run_time=anim_run_time)
            self.wait(final_wait)
            return

        first_label, first_expr = stages[0]
        title = self._title(0, first_label)
        label = MathTex(first_expr.render())
        self._fit_to_frame(label)
        self.play(FadeIn(title), FadeIn(label), run_time=anim_run_time)

        for i, (stage_label, stage_expr) in enumerate(stages[1:], start=1):
            new_title = self._title(i, stage_label)
            new_label = MathTex(stage_expr.render())
            self._fit_to_frame(new_label)
            self.play(
                Transform(title, new_title),
                Transform(label, new_label),
                run_time=anim_run_time,
            )

        self.wait(final_wait)

    def _title(self, index: int, stage_label: str) -> Text:
        title = Text(f"Step {index}: {stage_label}", font="Noto Sans", weight="BOLD")
        title.scale(0.45).to_edge(UP, buff=0.1)
        return title

    def _fit_to_frame(self, mob) -> None:
        max_width = config.frame_width * 0.9
        max_height = config.frame_height * 0.8
        if mob.width > max_width:
            mob.scale(max_width / mob.width)
        if mob.height > max_height:
            mob.scale(max_height / mob.height)
        mob.move_to([0, 0, 0])


def main() -> None:
    print("Enter a step description as a Python literal (end with an empty line):")
    lines: List[str] = []
    while True:
        try:
            line = input()
        except EOFError:
            break
        if not line.strip():
            break
        lines.append(line)
    expr = "\n".join(lines).strip() or DEFAULT_EXPR

    try:
        stages = load_stages(expr)
    except ShapeError as exc:
        print(f"Shape error: {exc}", file=sys.stderr)
        raise SystemExit(1)

    print("Stages:")
    for i, (stage_label, stage_expr) in enumerate(stages):
        print(f"Step {i} ({stage_label}): {stage_expr.render()}")

    env = os.environ.copy()
    env[EXPR_ENV] = expr

    cmd: List[str] = ["manim", "-pqh", os.path.abspath(__file__), "StagesScene"]
    subprocess.run(cmd, check=False, env=env)


if __name__ == "__main__":
    main()
