from __future__ import annotations

import pytest

from navgen.generator import ExtensionGenerator, decapitalize, keep_annotation
from navgen.introspection import DeclaredCapabilities
from navgen.model import Annotation, ClassDescriptor, ConstructorParam


def builder_preparer(unit):
    return unit.functions[2]


def test_unit_naming(detail_activity, capabilities):
    (unit,) = ExtensionGenerator("/out", capabilities).generate([detail_activity])

    assert unit.package_name == "com.example"
    assert unit.file_name == "DetailActivityNavigatorExtensions"
    assert unit.jvm_name == "DetailActivityNavigator"
    assert unit.relative_path == "com/example/DetailActivityNavigatorExtensions.kt"
    assert len(unit.functions) == 3


def test_navigator_registration_function(detail_activity, capabilities):
    (unit,) = ExtensionGenerator("/out", capabilities).generate([detail_activity])
    register = unit.functions[0]

    assert register.name == "bind"
    assert register.receiver.qualified_name == "com.shaishavgandhi.navigator.Navigator"
    assert register.parameter_list == "binder: DetailActivity"
    assert register.body == "DetailActivityBinder.bind(binder)"


def test_receiver_bind_function(detail_activity, capabilities):
    (unit,) = ExtensionGenerator("/out", capabilities).generate([detail_activity])
    bind = unit.functions[1]

    assert bind.receiver.qualified_name == "com.example.DetailActivity"
    assert bind.parameters == ()
    assert bind.body == "DetailActivityBinder.bind(this)"
    assert "@see DetailActivityBinder" in bind.kdoc


def test_builder_preparer_drops_non_null_and_keeps_order(capabilities):
    class_descriptor = ClassDescriptor(
        "com.example.Screen",
        (
            ConstructorParam("id", "int", (Annotation("NonNull"),)),
            ConstructorParam("label", "java.lang.String"),
        ),
    )

    (unit,) = ExtensionGenerator("/out", capabilities).generate([class_descriptor])
    preparer = builder_preparer(unit)

    assert preparer.name == "screenBuilder"
    assert preparer.receiver.qualified_name == "kotlin.Any"
    assert preparer.returns.qualified_name == "com.example.ScreenBuilder"
    assert [annotation.simple_name for annotation in preparer.annotations] == ["CheckResult"]
    assert preparer.parameter_list == "id: Int, label: String"
    assert preparer.parameters[0].annotations == ()
    assert preparer.body == "ScreenBuilder.builder(id, label)"


def test_builder_preparer_without_params(empty_activity, capabilities):
    (unit,) = ExtensionGenerator("/out", capabilities).generate([empty_activity])
    preparer = builder_preparer(unit)

    assert preparer.parameter_list == ""
    assert preparer.body == "EmptyActivityBuilder.builder()"


def test_other_annotations_survive(detail_activity, capabilities):
    (unit,) = ExtensionGenerator("/out", capabilities).generate([detail_activity])
    label = builder_preparer(unit).parameters[1]

    assert [annotation.qualified_name for annotation in label.annotations] == ["android.support.annotation.Nullable"]


@pytest.mark.parametrize(
    "qualified_name, kept",
    [
        ("android.support.annotation.NonNull", False),
        ("androidx.annotation.NonNull", False),
        ("NonNull", False),
        ("javax.annotation.Nonnull", True),
        ("org.jetbrains.annotations.NotNull", True),
        ("android.support.annotation.Nullable", True),
    ],
)
def test_non_null_filter_is_a_literal_simple_name_match(qualified_name, kept):
    assert keep_annotation(Annotation(qualified_name)) is kept


def test_parcelable_types_flow_into_signature(capabilities):
    class_descriptor = ClassDescriptor(
        "com.example.UsersActivity",
        (
            ConstructorParam("users", "java.util.ArrayList<com.example.User>"),
            ConstructorParam("byId", "android.util.SparseArray<com.example.User>"),
            ConstructorParam("homes", "com.example.Address[]"),
        ),
    )

    (unit,) = ExtensionGenerator("/out", capabilities).generate([class_descriptor])

    assert builder_preparer(unit).parameter_list == (
        "users: ArrayList<User>, "
        "byId: android.util.SparseArray<com.example.User>, "
        "homes: Array<com.example.Address>"
    )


def test_units_follow_input_order(detail_activity, empty_activity, capabilities):
    units = ExtensionGenerator("/out", capabilities).generate([empty_activity, detail_activity])

    assert [unit.file_name for unit in units] == [
        "EmptyActivityNavigatorExtensions",
        "DetailActivityNavigatorExtensions",
    ]


@pytest.mark.parametrize("output_dir", [None, "", "   "])
def test_no_output_dir_is_a_no_op(output_dir, detail_activity, empty_activity, capabilities):
    assert ExtensionGenerator(output_dir, capabilities).generate([detail_activity, empty_activity] * 5) == []


def test_empty_input_is_a_no_op(capabilities):
    assert ExtensionGenerator("/out", capabilities).generate([]) == []


def test_overlay_does_not_carry_over_between_runs():
    extension_generator = ExtensionGenerator("/out", DeclaredCapabilities({"com.example.User"}))
    first_run = ClassDescriptor("com.example.A", (ConstructorParam("users", "java.util.ArrayList<com.example.User>"),))
    extension_generator.generate([first_run])

    # Same descriptor, but User is no longer declared Parcelable.
    extension_generator.capabilities = DeclaredCapabilities()
    second_run = ClassDescriptor("com.example.B", (ConstructorParam("users", "java.util.ArrayList<com.example.User>"),))
    (unit,) = extension_generator.generate([second_run])

    users_type = builder_preparer(unit).parameters[0].type
    assert users_type.namespace == "java.util"
    assert users_type.qualified_name == "java.util.ArrayList<com.example.User>"


def test_custom_navigator_class(detail_activity, capabilities):
    extension_generator = ExtensionGenerator("/out", capabilities, navigator_class="com.acme.Router")

    (unit,) = extension_generator.generate([detail_activity])

    assert unit.functions[0].receiver.qualified_name == "com.acme.Router"


class FailingWriter:
    def __init__(self):
        self.attempts = 0

    def write(self, unit):
        self.attempts += 1
        raise OSError("disk full")


def test_writer_failure_propagates_without_retry(detail_activity, empty_activity, capabilities):
    writer = FailingWriter()

    with pytest.raises(OSError, match="disk full"):
        ExtensionGenerator("/out", capabilities).generate_and_write([detail_activity, empty_activity], writer)

    assert writer.attempts == 1


@pytest.mark.parametrize("name, expected", [("SampleActivity", "sampleActivity"), ("URLView", "uRLView"), ("", "")])
def test_decapitalize(name, expected):
    assert decapitalize(name) == expected
