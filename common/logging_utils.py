import logging, functools, time
from dataclasses import fields

from common.units import Q_
from common.models import Stream
from common.results import UnitResult

TRACE_LEVEL_NUM = 5
logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")

class _TraceLogger(logging.Logger):
    def trace(self, msg, *a, **k):
        if self.isEnabledFor(TRACE_LEVEL_NUM):
            self._log(TRACE_LEVEL_NUM, msg, a, **k)
logging.setLoggerClass(_TraceLogger)

_FMT = "%(asctime)s | %(levelname)s | %(name)s | unit=%(unit)s step=%(step)s | %(message)s"
_DATE = "%Y-%m-%d %H:%M:%S"

class _UnitOp(logging.Filter):
    """Records logged outside a unit operation get '-' placeholders."""
    def filter(self, r):
        if not hasattr(r, "unit"): r.unit = "-"
        if not hasattr(r, "step"): r.step = "-"
        return True

def setup_logging(level: int | str = logging.INFO):
    if isinstance(level, str):
        lvl = logging.getLevelName(level.upper())
        level = lvl if isinstance(lvl, int) else logging.INFO
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter(_FMT, _DATE))
    h.addFilter(_UnitOp())
    root.addHandler(h)

def op_extra(unit: str, step: str = "-") -> dict:
    return {"unit": unit, "step": step}

def _fmt(v):
    if isinstance(v, Stream):
        comps = " ".join(f"{c.species.value}={c.m:.4g~P}" for c in v)
        return f"<{v.ID} T={v.T:.5g~P} {comps}>"
    if isinstance(v, UnitResult):
        return "(" + ", ".join(f"{f.name}={_fmt(getattr(v, f.name))}" for f in fields(v)) + ")"
    try:    return f"{v:.6g~P}"  # pint Quantity pretty
    except (TypeError, ValueError):
        return repr(v)

def _duty(out):
    """Heat duty carried by a unit-operation result, if it has one."""
    Q = getattr(out, "Q", None)
    return Q if isinstance(Q, Q_) else None

def trace_calls(name: str | None = None, values: bool = False):
    """Log a unit operation: entry, arguments, result and timing at TRACE.

    Results carrying a heat duty also log it at DEBUG under step=duty.
    Failures are logged with traceback and re-raised.
    """
    def _wrap(fn):
        qual = name or f"{fn.__module__}.{fn.__qualname__}"
        log = logging.getLogger(qual)
        unit = fn.__name__
        @functools.wraps(fn)
        def _inner(*a, **k):
            log.trace("enter", extra=op_extra(unit, "enter"))
            if values:
                arg_s = ", ".join([*map(_fmt, a),
                                   *[f"{kk}={_fmt(v)}" for kk, v in k.items()]])
                log.trace(f"args: {arg_s}", extra=op_extra(unit, "args"))
            t0 = time.perf_counter()
            try:
                out = fn(*a, **k)
            except Exception as e:
                log.exception(f"exit err: {e}", extra=op_extra(unit, "error"))
                raise
            dt = (time.perf_counter() - t0) * 1000
            if values:
                log.trace(f"ret: {_fmt(out)}", extra=op_extra(unit, "ret"))
            Q = _duty(out)
            if Q is not None:
                log.debug(f"Q={Q.to('kJ'):.6g~P}", extra=op_extra(unit, "duty"))
            log.trace(f"exit ok in {dt:.2f} ms", extra=op_extra(unit, "exit"))
            return out
        return _inner
    return _wrap
