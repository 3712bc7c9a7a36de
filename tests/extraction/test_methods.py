"""Tests for public method extraction."""

from __future__ import annotations

from compdoc.config import DEFAULT_INTERNAL_METHODS
from compdoc.extraction.methods import extract_methods
from compdoc.models import MethodDescriptor, ParameterDescriptor

COMPONENT_SOURCE = """
import React from 'react';

class WmButtonState {
  pressed = false;
}

export default class WmButton extends BaseComponent<WmButtonProps, WmButtonState, WmButtonStyles> {
  constructor(props: WmButtonProps) {
    super(props, DEFAULT_CLASS, new WmButtonProps());
  }

  public focus(): void {
  }

  blur(force?: boolean, delay: number = 0): boolean {
    return true;
  }

  private reset(): void {
  }

  static create(): WmButton {
    return new WmButton({} as any);
  }

  get label(): string {
    return '';
  }

  renderWidget(props: WmButtonProps): any {
    return null;
  }

  onPress = (event: any): void => {
  };

  helper() {
    return 1;
  }
}
"""


def test_extract_methods_keeps_only_public_callable_members() -> None:
    methods = extract_methods(COMPONENT_SOURCE, denylist=DEFAULT_INTERNAL_METHODS)

    assert methods == [
        MethodDescriptor(name="focus", parameters=(), return_type="void"),
        MethodDescriptor(
            name="blur",
            parameters=(
                ParameterDescriptor(name="force", type="boolean", optional=True),
                ParameterDescriptor(name="delay", type="number", optional=True),
            ),
            return_type="boolean",
        ),
        MethodDescriptor(
            name="onPress",
            parameters=(ParameterDescriptor(name="event", type="any", optional=False),),
            return_type="void",
        ),
    ]


def test_denylist_is_applied_at_parse_time() -> None:
    without_denylist = extract_methods(COMPONENT_SOURCE)

    assert without_denylist is not None
    assert "renderWidget" in [method.name for method in without_denylist]


def test_first_non_props_class_is_the_component_without_default_export() -> None:
    source = """
class WmIconProps {
  name: string;
}

class WmIcon {
  spin(speed: number): void {
  }

  #secret(): void {
  }
}
"""
    methods = extract_methods(source)

    assert methods is not None
    assert [method.name for method in methods] == ["spin"]


def test_extract_methods_returns_none_without_class() -> None:
    assert extract_methods("export const render = () => null;\n") is None
