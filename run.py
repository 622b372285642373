import logging

from cellscroll.app import TerminalApp
from cellscroll.settings import DEFAULT_CONFIG, load_settings, load_ui_defaults
from demo.scroll_demo import build_demo


def main():
    defaults = load_ui_defaults(DEFAULT_CONFIG)
    cfg = load_settings(data=defaults)
    logging.basicConfig(level=getattr(logging, cfg.log_level, logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = TerminalApp(cfg, build_demo(cfg, defaults))
    app.run()

if __name__ == "__main__":
    main()
