"""Platform type descriptors and Kotlin target type references."""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional


TypeDescriptor = str

ARRAY_SUFFIX = "[]"

WILDCARD_REGEX = re.compile(r"^\?\s+(extends|super)\s+(.+)$")
WILDCARD_VARIANCE = {"extends": "out", "super": "in"}
STAR_PROJECTION = "*"


# ============================================================
# Descriptor helpers
# ============================================================

def split_generic(descriptor: TypeDescriptor) -> tuple[str, list[TypeDescriptor]]:
    """
    Split a generic descriptor into its raw name and top-level arguments.

      "java.util.ArrayList<com.example.User>" -> ("java.util.ArrayList", ["com.example.User"])
      "java.util.Map<K, java.util.List<V>>"   -> ("java.util.Map", ["K", "java.util.List<V>"])
      "int"                                   -> ("int", [])
    """
    descriptor = descriptor.strip()
    open_index = descriptor.find("<")
    if open_index < 0 or not descriptor.endswith(">"):
        return descriptor, []

    raw_name = descriptor[:open_index].strip()
    arguments_text = descriptor[open_index + 1:-1]

    arguments: list[str] = []
    depth = 0
    current: list[str] = []
    for character in arguments_text:
        if character == "<":
            depth += 1
        elif character == ">":
            depth -= 1
        elif character == "," and depth == 0:
            arguments.append("".join(current).strip())
            current = []
            continue
        current.append(character)

    last_argument = "".join(current).strip()
    if last_argument:
        arguments.append(last_argument)

    return raw_name, [argument for argument in arguments if argument]


def array_component(descriptor: TypeDescriptor) -> Optional[TypeDescriptor]:
    """Return the component descriptor of a one-dimensional array, else None."""
    descriptor = descriptor.strip()
    if not descriptor.endswith(ARRAY_SUFFIX):
        return None
    component = descriptor[: -len(ARRAY_SUFFIX)].strip()
    return component or None


def split_qualified_name(qualified_name: str) -> tuple[str, str]:
    """Split "com.example.Foo" into ("com.example", "Foo"); generics stay on the simple name."""
    raw_name = qualified_name.split("<", 1)[0]
    dot_index = raw_name.rfind(".")
    if dot_index < 0:
        return "", qualified_name
    return qualified_name[:dot_index], qualified_name[dot_index + 1:]


def split_wildcard(argument: TypeDescriptor) -> tuple[str, Optional[TypeDescriptor]]:
    """
    Translate a Java wildcard argument into a Kotlin variance and bound.

      "? extends Foo" -> ("out", "Foo")
      "? super Foo"   -> ("in", "Foo")
      "?"             -> ("", None)     (star projection)
      "Foo"           -> ("", "Foo")
    """
    argument = argument.strip()
    if argument == "?":
        return "", None
    match = WILDCARD_REGEX.match(argument)
    if match is None:
        return "", argument
    return WILDCARD_VARIANCE[match.group(1)], match.group(2).strip()


def kotlin_wildcards(descriptor: TypeDescriptor) -> str:
    """Rewrite wildcards in a descriptor written out verbatim: `? extends X` -> `out X`, `?` -> `*`."""
    rewritten = re.sub(r"\?\s+extends\s+", "out ", descriptor)
    rewritten = re.sub(r"\?\s+super\s+", "in ", rewritten)
    return re.sub(r"\?", STAR_PROJECTION, rewritten)


# ============================================================
# Target types
# ============================================================

@dataclass(frozen=True)
class TargetType:
    """A Kotlin class reference, optionally parameterized with a single type argument."""
    simple_name: str
    namespace: str = ""

    argument: Optional["TargetType"] = None

    # Verbatim types are rendered fully qualified and never imported.
    verbatim: bool = False

    # Use-site variance when this type is a type argument: "out", "in" or "".
    variance: str = ""

    @property
    def raw_qualified_name(self) -> str:
        """Qualified name without the type argument."""
        if not self.namespace:
            return self.simple_name
        return f"{self.namespace}.{self.simple_name}"

    @property
    def qualified_name(self) -> str:
        """Fully qualified name including variance and the type argument."""
        rendered = self.raw_qualified_name
        if self.argument is not None:
            rendered = f"{rendered}<{self.argument.qualified_name}>"
        if self.variance:
            rendered = f"{self.variance} {rendered}"
        return rendered

    def parameterized_by(self, argument: "TargetType") -> "TargetType":
        """Return a copy of this type with the given type argument."""
        return replace(self, argument=argument)

    @classmethod
    def of(cls, qualified_name: str) -> "TargetType":
        """Build a non-generic type from a dotted name."""
        namespace, simple_name = split_qualified_name(qualified_name)
        return cls(simple_name=simple_name, namespace=namespace)

    @classmethod
    def best_guess(cls, descriptor: TypeDescriptor) -> "TargetType":
        """
        Treat a platform descriptor as a directly usable Kotlin type.

        A single generic argument is kept as a nested TargetType, with Java
        wildcards turned into Kotlin variance. Generics with several
        arguments are written out fully qualified.
        """
        descriptor = descriptor.strip()
        raw_name, arguments = split_generic(descriptor)
        if len(arguments) == 1:
            return cls.of(raw_name).parameterized_by(cls.best_guess_argument(arguments[0]))
        if len(arguments) > 1:
            return cls.literal(kotlin_wildcards(descriptor))

        namespace, simple_name = split_qualified_name(descriptor)
        return cls(simple_name=simple_name, namespace=namespace)

    @classmethod
    def best_guess_argument(cls, argument: TypeDescriptor) -> "TargetType":
        """Resolve a type argument, mapping `? extends X` to `out X` and `?` to `*`."""
        variance, bound = split_wildcard(argument)
        if bound is None:
            return cls(simple_name=STAR_PROJECTION)
        return replace(cls.best_guess(bound), variance=variance)

    @classmethod
    def literal(cls, descriptor: TypeDescriptor) -> "TargetType":
        """Keep the platform type name exactly as written."""
        descriptor = descriptor.strip()
        namespace, simple_name = split_qualified_name(descriptor)
        return cls(simple_name=simple_name, namespace=namespace, verbatim=True)

    def __str__(self) -> str:
        return self.qualified_name
