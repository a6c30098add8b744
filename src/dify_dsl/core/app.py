""" Top-level Dify DSL document (``kind: app``). """

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .fields import mapping, string
from .graph import Graph
from .workflow import Workflow

DEFAULT_VERSION = "0.2.0"
DEFAULT_ICON = "🤖"
DEFAULT_ICON_BACKGROUND = "#FFEAD5"


@dataclass
class App:
    name: str
    description: str = ""
    mode: str = "workflow"
    workflow: Workflow = field(default_factory=Workflow)
    kind: str = "app"
    version: str = DEFAULT_VERSION
    icon: str = DEFAULT_ICON
    icon_background: str = DEFAULT_ICON_BACKGROUND
    use_icon_as_answer_icon: bool = False
    # Keyed by dependency name; exported documents may carry a list instead.
    dependencies: Union[Dict[str, Any], List[Any]] = field(default_factory=dict)
    model_config: Optional[Dict[str, Any]] = None

    @classmethod
    def create(cls, name: str, mode: str = "workflow") -> "App":
        return cls(name=name, mode=mode, workflow=Workflow(Graph()))

    @classmethod
    def from_tree(cls, data: Dict[str, Any], workflow: Optional[Workflow] = None) -> "App":
        """
        Lenient extraction: every field falls back to its default when missing
        or mistyped. Nodes need the registry, so when ``workflow`` is omitted the
        graph is left empty; DifyParser builds it (and validates the envelope).
        """
        app_data = mapping(data, "app")
        if workflow is None:
            workflow = Workflow.from_tree(mapping(data, "workflow"))

        dependencies = data.get("dependencies")
        if not isinstance(dependencies, (dict, list)):
            dependencies = {}
        model_config = data.get("model_config")
        use_icon = app_data.get("use_icon_as_answer_icon")

        return cls(
            name=string(app_data, "name"),
            description=string(app_data, "description"),
            mode=string(app_data, "mode", "workflow"),
            workflow=workflow,
            kind=string(data, "kind", "app"),
            version=string(data, "version", DEFAULT_VERSION),
            icon=string(app_data, "icon", DEFAULT_ICON),
            icon_background=string(app_data, "icon_background", DEFAULT_ICON_BACKGROUND),
            use_icon_as_answer_icon=use_icon if isinstance(use_icon, bool) else False,
            dependencies=copy.deepcopy(dependencies),
            model_config=copy.deepcopy(model_config) if isinstance(model_config, dict) else None,
        )

    def add_dependency(self, key: str, dependency: Dict[str, Any]) -> "App":
        if isinstance(self.dependencies, list):
            raise TypeError("dependencies were loaded as a list; append to app.dependencies instead")
        self.dependencies[key] = dependency
        return self

    def to_tree(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "app": {
                "name": self.name,
                "description": self.description,
                "icon": self.icon,
                "icon_background": self.icon_background,
                "mode": self.mode,
                "use_icon_as_answer_icon": self.use_icon_as_answer_icon,
            },
            "kind": self.kind,
            "version": self.version,
            "workflow": self.workflow.to_tree(),
        }
        if self.dependencies:
            data["dependencies"] = copy.deepcopy(self.dependencies)
        if self.model_config is not None:
            data["model_config"] = copy.deepcopy(self.model_config)
        return data
