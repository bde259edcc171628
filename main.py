# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

from utils.crashlog import setup_crashlog, log_exception, log_dir
setup_crashlog()

import argparse
import logging, traceback
from config import AppConfig, LatticeConfig, TuningConfig, InputConfig, AudioConfig
from lattice.tuning import GROUP_RULES


def _init_logging():
    logs = log_dir()
    log_path = os.path.join(logs, "app.log")

    if logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        encoding="utf-8"
    )
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logging.getLogger().addHandler(fh)
    except OSError:
        logging.warning("無法寫入 %s，只輸出到 console", log_path)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Just-intonation hexagonal keyboard")
    ap.add_argument('--width', type=int, default=1280)
    ap.add_argument('--height', type=int, default=800)
    ap.add_argument('--fundamental', type=float, default=440.0)
    ap.add_argument('--radius', type=int, default=61, help="hex radius in pixels")
    ap.add_argument('--q-interval', default="3/2")
    ap.add_argument('--r-interval', default="5/4")
    ap.add_argument('--semitone', default=None, help="semitone ratio (default 12-TET)")
    ap.add_argument('--comma', default="81/80")
    ap.add_argument('--group-rule', default="three_colour", choices=sorted(GROUP_RULES))
    ap.add_argument('--keymap', default=None, help="JSON file: key name -> [q, r]")
    ap.add_argument('--volume', type=float, default=0.2)
    return ap


def config_from_args(args) -> AppConfig:
    if args.fundamental <= 0:
        raise SystemExit("--fundamental must be positive")
    return AppConfig(
        lattice=LatticeConfig(window_w=args.width, window_h=args.height,
                              fundamental=args.fundamental, radius=args.radius),
        tuning=TuningConfig(q_interval=args.q_interval, r_interval=args.r_interval,
                            semitone=args.semitone, comma=args.comma,
                            group_rule=args.group_rule),
        input=InputConfig(keymap_path=args.keymap),
        audio=AudioConfig(volume=args.volume),
    )


def main(argv=None):
    _init_logging()
    logging.info("應用程式啟動")

    cfg = config_from_args(build_parser().parse_args(argv))

    from app import App
    App(cfg).run()

if __name__ == '__main__':
    try:
        main()
    except Exception as e:
        try:
            log_exception("Top-level exception", e)
        except OSError:
            pass
        logging.error("未捕捉的例外：%s", e, exc_info=True)
        print("程式發生錯誤，請到 logs/ 資料夾看 app.log 與 error-*.txt")
        traceback.print_exc()
