"""
Capa de observación de campos
Eventos `change:<campo>` y `change` al modificar atributos
"""

import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


class Events:
    """Registro mínimo de eventos con on/off/trigger"""

    def __init__(self):
        self._listeners: Dict[str, List[Callback]] = {}

    def on(self, event: str, callback: Callback) -> "Events":
        self._listeners.setdefault(event, []).append(callback)
        return self

    def off(self, event: Optional[str] = None, callback: Optional[Callback] = None) -> "Events":
        if event is None:
            self._listeners.clear()
        elif callback is None:
            self._listeners.pop(event, None)
        else:
            listeners = self._listeners.get(event, [])
            self._listeners[event] = [cb for cb in listeners if cb is not callback]
        return self

    def trigger(self, event: str, *args: Any) -> "Events":
        # Copia para permitir off() dentro de un callback
        for callback in list(self._listeners.get(event, [])):
            callback(*args)
        return self


class ObservableModel(Events):
    """Mapa de atributos observable: get/set/has/unset"""

    def __init__(self, attributes: Optional[Dict[str, Any]] = None):
        super().__init__()
        self._attributes: Dict[str, Any] = {}
        if attributes:
            self._attributes.update(attributes)

    @property
    def attributes(self) -> Dict[str, Any]:
        """Copia superficial de los atributos actuales"""
        return dict(self._attributes)

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def has(self, key: str) -> bool:
        return self._attributes.get(key) is not None

    def set(self, key: Any, value: Any = None, *, silent: bool = False) -> "ObservableModel":
        """Asigna uno (`set('title', x)`) o varios (`set({...})`) atributos"""
        changes = key if isinstance(key, dict) else {key: value}

        changed = []
        for name, new_value in changes.items():
            if name in self._attributes and self._attributes[name] == new_value:
                continue
            self._attributes[name] = new_value
            changed.append(name)

        if changed and not silent:
            for name in changed:
                self.trigger(f'change:{name}', self, self._attributes[name])
            self.trigger('change', self)
        return self

    def unset(self, key: str, *, silent: bool = False) -> "ObservableModel":
        if key not in self._attributes:
            return self
        del self._attributes[key]
        if not silent:
            self.trigger(f'change:{key}', self, None)
            self.trigger('change', self)
        return self
