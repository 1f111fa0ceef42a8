from __future__ import annotations

import logging
from dataclasses import dataclass

from ..layout import auto_layout
from ..model.method import Method
from ..model.parameter import Parameter
from ..model.relationship import RelationshipType
from ..model.signature import MethodSignature
from ..render import render_class, render_classes, render_diagram, render_relationships
from .base import Command, EditorContext, UntrackableCommand
from .registry import command, command_templates

logger = logging.getLogger(__name__)

# ============================================================================
# Built-in commands
#
# Registration order is the order `help` lists them in. Dataclass fields
# receive the parsed holes of the template, left to right.
# ============================================================================

# ============================================================================
# Persistence and queries (untrackable)
# ============================================================================


@command("load [filename]")
@dataclass
class LoadCommand(UntrackableCommand):
    filename: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.load(self.filename)


@command("save [filename]")
@dataclass
class SaveCommand(UntrackableCommand):
    filename: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.save(self.filename)


@command("list all")
@dataclass
class ListAllCommand(UntrackableCommand):
    def execute(self, ctx: EditorContext) -> None:
        ctx.write(render_diagram(ctx.diagram))


@command("list classes")
@dataclass
class ListClassesCommand(UntrackableCommand):
    def execute(self, ctx: EditorContext) -> None:
        ctx.write(render_classes(ctx.diagram))


@command("list relationships")
@dataclass
class ListRelationshipsCommand(UntrackableCommand):
    def execute(self, ctx: EditorContext) -> None:
        ctx.write(render_relationships(ctx.diagram))


@command("list class [class_name]")
@dataclass
class ListClassCommand(UntrackableCommand):
    class_name: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.write(render_class(ctx.diagram.get_class(self.class_name)))


@command("help")
@dataclass
class HelpCommand(UntrackableCommand):
    def execute(self, ctx: EditorContext) -> None:
        ctx.write("\n".join(command_templates()))


@command("exit")
@dataclass
class ExitCommand(UntrackableCommand):
    def execute(self, ctx: EditorContext) -> None:
        ctx.running = False


@command("undo")
@dataclass
class UndoCommand(UntrackableCommand):
    def execute(self, ctx: EditorContext) -> None:
        ctx.timeline.undo().undo(ctx)


@command("redo")
@dataclass
class RedoCommand(UntrackableCommand):
    def execute(self, ctx: EditorContext) -> None:
        ctx.timeline.redo().execute(ctx)


# ============================================================================
# Classes
# ============================================================================


@command("class add [name]")
@dataclass
class AddClassCommand(Command):
    name: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.add_class(self.name)


@command("class remove [class_name]")
@dataclass
class RemoveClassCommand(Command):
    class_name: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.delete_class(self.class_name)


@command("class rename [class_name] [name]")
@dataclass
class RenameClassCommand(Command):
    class_name: str
    name: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.rename_class(self.class_name, self.name)


@command("class move [class_name] [int] [int]")
@dataclass
class MoveClassCommand(Command):
    class_name: str
    x: int
    y: int

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.move_class(self.class_name, self.x, self.y)


# ============================================================================
# Fields
# ============================================================================


@command("field add [class_name] [name] [type]")
@dataclass
class AddFieldCommand(Command):
    class_name: str
    name: str
    type: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.get_class(self.class_name).add_field(self.name, self.type)


@command("field remove [class_name] [field_name]")
@dataclass
class RemoveFieldCommand(Command):
    class_name: str
    field_name: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.get_class(self.class_name).delete_field(self.field_name)


@command("field rename [class_name] [field_name] [name]")
@dataclass
class RenameFieldCommand(Command):
    class_name: str
    field_name: str
    name: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.get_class(self.class_name).rename_field(self.field_name, self.name)


@command("field retype [class_name] [field_name] [type]")
@dataclass
class RetypeFieldCommand(Command):
    class_name: str
    field_name: str
    type: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.get_class(self.class_name).change_field_type(self.field_name, self.type)


# ============================================================================
# Methods
# ============================================================================


@command("method add [class_name] [method_definition]")
@dataclass
class AddMethodCommand(Command):
    class_name: str
    method: Method

    def execute(self, ctx: EditorContext) -> None:
        m = self.method
        ctx.diagram.get_class(self.class_name).add_method(m.name, m.return_type, m.parameters)


@command("method remove [class_name] [method_signature]")
@dataclass
class RemoveMethodCommand(Command):
    class_name: str
    signature: MethodSignature

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.get_class(self.class_name).delete_method(self.signature)


@command("method rename [class_name] [method_signature] [name]")
@dataclass
class RenameMethodCommand(Command):
    class_name: str
    signature: MethodSignature
    name: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.get_class(self.class_name).rename_method(self.signature, self.name)


@command("method change-return-type [class_name] [method_signature] [type]")
@dataclass
class ChangeReturnTypeCommand(Command):
    class_name: str
    signature: MethodSignature
    type: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.get_class(self.class_name).change_return_type(self.signature, self.type)


# ============================================================================
# Parameters
# ============================================================================


@command("parameter add [class_name] [method_signature] [name] [type]")
@dataclass
class AddParameterCommand(Command):
    class_name: str
    signature: MethodSignature
    name: str
    type: str

    def execute(self, ctx: EditorContext) -> None:
        cls = ctx.diagram.get_class(self.class_name)
        cls.add_parameter(self.signature, self.name, self.type)


@command("parameter remove [class_name] [method_signature] [param_name]")
@dataclass
class RemoveParameterCommand(Command):
    class_name: str
    signature: MethodSignature
    param_name: str

    def execute(self, ctx: EditorContext) -> None:
        cls = ctx.diagram.get_class(self.class_name)
        cls.delete_parameter(self.signature, self.param_name)


@command("parameter rename [class_name] [method_signature] [param_name] [name]")
@dataclass
class RenameParameterCommand(Command):
    class_name: str
    signature: MethodSignature
    param_name: str
    name: str

    def execute(self, ctx: EditorContext) -> None:
        cls = ctx.diagram.get_class(self.class_name)
        cls.rename_parameter(self.signature, self.param_name, self.name)


@command("parameter retype [class_name] [method_signature] [param_name] [type]")
@dataclass
class RetypeParameterCommand(Command):
    class_name: str
    signature: MethodSignature
    param_name: str
    type: str

    def execute(self, ctx: EditorContext) -> None:
        cls = ctx.diagram.get_class(self.class_name)
        cls.change_parameter_type(self.signature, self.param_name, self.type)


@command("parameters clear [class_name] [method_signature]")
@dataclass
class ClearParametersCommand(Command):
    class_name: str
    signature: MethodSignature

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.get_class(self.class_name).delete_parameters(self.signature)


@command("parameters set [class_name] [method_signature] [param_list]")
@dataclass
class SetParametersCommand(Command):
    class_name: str
    signature: MethodSignature
    parameters: list[Parameter]

    def execute(self, ctx: EditorContext) -> None:
        cls = ctx.diagram.get_class(self.class_name)
        cls.change_parameters(self.signature, self.parameters)


# ============================================================================
# Relationships
# ============================================================================


@command("relationship add [class_name] [class_name] [relationship_type]")
@dataclass
class AddRelationshipCommand(Command):
    source: str
    destination: str
    type: RelationshipType

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.add_relationship(self.source, self.destination, self.type)


@command("relationship remove [class_source] [class_destination]")
@dataclass
class RemoveRelationshipCommand(Command):
    source: str
    destination: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.delete_relationship(self.source, self.destination)


@command("relationship change source [class_source] [class_destination] [class_name]")
@dataclass
class ChangeSourceCommand(Command):
    source: str
    destination: str
    new_source: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.change_relationship_source(self.source, self.destination, self.new_source)


@command("relationship change destination [class_source] [class_destination] [class_name]")
@dataclass
class ChangeDestinationCommand(Command):
    source: str
    destination: str
    new_destination: str

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.change_relationship_destination(
            self.source, self.destination, self.new_destination
        )


@command("relationship change type [class_source] [class_destination] [relationship_type]")
@dataclass
class ChangeTypeCommand(Command):
    source: str
    destination: str
    type: RelationshipType

    def execute(self, ctx: EditorContext) -> None:
        ctx.diagram.change_relationship_type(self.source, self.destination, self.type)


# ============================================================================
# Layout
# ============================================================================


@command("layout")
@dataclass
class LayoutCommand(Command):
    def execute(self, ctx: EditorContext) -> None:
        auto_layout(
            ctx.diagram,
            node_spacing=ctx.config.layout_node_spacing,
            layer_spacing=ctx.config.layout_layer_spacing,
        )
