# debug.py
from __future__ import annotations
import logging
from typing import Dict

LOGGER_NAME = "ENIGMA"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Debug:
    _root_configured: bool = False          # class-level guard

    # shared between every module-level instance so the CLI can flip
    # a component on once and have it take effect everywhere
    enabled: bool = True
    components: Dict[str, bool] = {
        "alphabet":    False,
        "permutation": False,
        "rotor":       False,
        "stepping":    False,
        "plugboard":   False,
        "convert":     False,
        "config":      False,
    }

    def __init__(self) -> None:
        """Multiple Debug() instances share the same root logger config
        and the same component map."""
        if not Debug._root_configured:
            logging.basicConfig(
                level=logging.DEBUG,
                format=LOG_FORMAT,
                datefmt=DATE_FORMAT,
                handlers=[logging.StreamHandler()],
            )
            Debug._root_configured = True

        self.logger = logging.getLogger(LOGGER_NAME)
        # gating is done by the component map, not by logger level
        self.logger.setLevel(logging.DEBUG)

    # ── logging API ──────────────────────────────────────────────
    def is_on(self, component: str) -> bool:
        return Debug.enabled and Debug.components.get(component, False)

    def log(self, component: str, message: str, *args: object) -> None:
        """%-style ARGS are only formatted when COMPONENT is switched on."""
        if self.is_on(component):
            self.logger.debug("[%s] " + message, component.upper(), *args)

    def warn(self, message: str, *args: object) -> None:
        """Warnings ignore the component map but honour the global switch."""
        if Debug.enabled:
            self.logger.warning(message, *args)

    def add_file(self, path: str) -> logging.Handler:
        """Also write records to PATH; returns the handler so it can be removed."""
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logging.getLogger().addHandler(handler)
        return handler

    def remove_file(self, handler: logging.Handler) -> None:
        logging.getLogger().removeHandler(handler)
        handler.close()

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug.components[c] = False

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        Debug.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug.components:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in Debug.components.items() if v]
        return f"<Debug enabled={Debug.enabled} active={active}>"
