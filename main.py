"""
Entry-point.  Keeps top-level script tiny.
"""
import logging
import pygame
from ufo_radar import config, gui

def main():
    cfg = config.load()
    logging.basicConfig(level=cfg.get("log_level", "INFO"),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    app = gui.RadarGUI(cfg)
    app.run()
    config.save(cfg)

if __name__ == "__main__":
    main()
