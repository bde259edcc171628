# utils/crashlog.py
import os, sys, faulthandler, datetime, traceback, threading

_fault_file = None
_LOG_ENV = "HONEYCOMB_LOG_DIR"


def log_dir() -> str:
    """logs/ 位置：環境變數優先，否則放在工作目錄下。"""
    d = os.environ.get(_LOG_ENV) or os.path.join(os.getcwd(), "logs")
    os.makedirs(d, exist_ok=True)
    return d


def _new_log_path(prefix: str) -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    return os.path.join(log_dir(), f"{prefix}-{stamp}.txt")


def write_report(prefix: str, header: str, exc_type, exc, tb) -> str:
    path = _new_log_path(prefix)
    with open(path, "w", encoding="utf-8") as out:
        out.write(header + "\n")
        out.write("=" * 60 + "\n")
        traceback.print_exception(exc_type, exc, tb, file=out)
    return path


def setup_crashlog():
    """Native faults, uncaught exceptions and thread crashes each get a file in logs/."""
    global _fault_file
    if _fault_file is None:
        try:
            _fault_file = open(_new_log_path("native"), "w", encoding="utf-8")
            faulthandler.enable(_fault_file, all_threads=True)
        except OSError:
            _fault_file = None

    def _hook(exc_type, exc, tb):
        try:
            write_report("crash", "UNCAUGHT EXCEPTION", exc_type, exc, tb)
        finally:
            sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook

    def _thread_hook(args):
        name = args.thread.name if args.thread is not None else "?"
        try:
            write_report("thread", f"THREAD {name} EXCEPTION", args.exc_type, args.exc_value, args.exc_traceback)
        finally:
            threading.__excepthook__(args)
    threading.excepthook = _thread_hook


def log_exception(title: str, exc: BaseException) -> str:
    return write_report("error", f"[{title}] {type(exc).__name__}: {exc}", type(exc), exc, exc.__traceback__)
