"""
Headless poller: stream detected emotions as JSON lines.
"""
from __future__ import annotations
import argparse, json, logging, sys, time
from core.capture import CaptureSession
from core.config import Settings

def main(argv=None) -> int:
    p = argparse.ArgumentParser()
    p.add_argument("--url", default=None, help="Detection endpoint URL (default: $ENDPOINT_URL)")
    p.add_argument("--camera", type=int, default=None, help="Camera index")
    p.add_argument("--interval", type=float, default=None, help="Seconds between polls")
    p.add_argument("--seconds", type=float, default=0, help="Stop after N seconds (0 = until Ctrl-C)")
    args = p.parse_args(argv)

    overrides = {}
    if args.camera is not None:
        overrides["CAMERA_INDEX"] = args.camera
    if args.interval is not None:
        overrides["POLL_INTERVAL"] = args.interval
    settings = Settings(**overrides)
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))

    with CaptureSession(settings) as session:
        if not session.start(args.url):
            print(session.last_alert, file=sys.stderr)
            return 1
        deadline = time.time() + args.seconds if args.seconds > 0 else None
        last = None
        try:
            while deadline is None or time.time() < deadline:
                cur = session.display.current
                if cur is not None and cur != last:
                    print(json.dumps({"ts": round(time.time(), 2), **cur.model_dump()}, ensure_ascii=False))
                last = cur
                time.sleep(0.1)
        except KeyboardInterrupt:
            pass
    return 0

if __name__ == "__main__":
    sys.exit(main())
