"""
Integration tests running the full pipeline against component projects on disk.
"""

import pytest

from component_meta import ComponentMetaConfig, create_parser, get_language_from_extension, parse_file
from component_meta.core.errors import UnsupportedLanguageError
from component_meta.core.models import DiscoveryMethod, PropertyType, TagNameSource
from component_meta.core.webcomponent.parser import NO_CLASS_ERROR, parse_component_file, parse_component_files

BUTTON = "src/components/button/button.component.ts"

PROJECT = {
    "src/utils/tag-name/constants.ts": """
        export const TAG_NAME_PREFIX = {
          PREFIX: 'mdc',
          SEPARATOR: '-',
        };
    """,
    "src/components/base/base.component.ts": """
        import { LitElement } from 'lit';
        import { property } from 'lit/decorators.js';

        /**
         * @event ready - Fired once connected.
         */
        export class Component extends LitElement {
          /** Optional id for tests. */
          @property({ attribute: 'data-testid' })
          testId?: string;

          connectedCallback() {
            this.dispatchEvent(new CustomEvent('ready'));
          }
        }
    """,
    "src/components/button/button.types.ts": """
        export type ButtonVariant = 'primary' | 'secondary' | 'tertiary';
    """,
    BUTTON: """
        import { property } from 'lit/decorators.js';
        import { Component } from '../base/base.component';
        import type { ButtonVariant } from './button.types';

        /**
         * A clickable button.
         *
         * @event click - Fired on activation. React: onPress
         */
        class Button extends Component {
          @property({ type: String, reflect: true })
          variant: ButtonVariant = 'primary';

          @property({ type: Boolean })
          disabled = false;

          @property({ attribute: false })
          handlers = {};

          activate() {
            this.dispatchEvent(new CustomEvent('activate', { detail: {} }));
            this.dispatchEvent(new CustomEvent('ready'));
          }
        }

        export default Button;
    """,
    "src/components/button/index.ts": """
        import Button from './button.component';
        import { TAG_NAME } from './button.constants';

        Button.register(TAG_NAME);

        export default Button;
    """,
    "src/components/button/button.constants.ts": """
        import utils from '../../utils/tag-name';

        export const TAG_NAME = utils.constructTagName('button');
    """,
}


class TestParseComponentFile:
    """Test the pipeline on a small component library."""

    def test_full_component(self, write_project):
        """Test the complete model for a component with a base class."""
        root = write_project(PROJECT)

        result = parse_component_file(str(root / BUTTON))

        assert result.ok
        assert result.warnings == ()
        model = result.value
        assert model.class_name == "Button"
        assert model.tag_name == "mdc-button"
        assert model.import_path == "components/button"
        assert model.file_path.endswith("/src/components/button/button.component.ts")
        assert result.class_source.discovery_method == DiscoveryMethod.DEFAULT_EXPORT
        assert result.tag_name_result.source == TagNameSource.REGISTRATION_FILE

        props = {p.name: p for p in model.props}
        assert list(props) == ["testId", "variant", "disabled", "handlers"]
        assert props["testId"].attribute == "data-testid"
        assert props["testId"].doc == "Optional id for tests."
        assert props["variant"].type == PropertyType.ENUM
        assert props["variant"].enum_values == ("primary", "secondary", "tertiary")
        assert props["disabled"].type == PropertyType.BOOLEAN
        assert [a.name for a in model.attributes] == ["data-testid", "variant", "disabled"]

        assert [(e.name, e.react_handler) for e in model.events] == [
            ("ready", "onReady"),
            ("click", "onPress"),
            ("activate", "onActivate"),
        ]

    def test_strict_mode_reports_unresolved_bases(self, write_project):
        """Test that strict mode turns external bases into an error."""
        root = write_project(PROJECT)

        result = parse_component_file(str(root / BUTTON), config=ComponentMetaConfig(strict=True))

        assert not result.ok
        assert result.errors == ("Unable to resolve base classes for: LitElement",)
        assert result.value is not None

    def test_no_class(self, write_project):
        """Test the error for a file without a class declaration."""
        root = write_project({"src/components/empty/empty.component.ts": "export const x = 1;\n"})

        result = parse_component_file(str(root / "src/components/empty/empty.component.ts"))

        assert result.value is None
        assert result.errors == (NO_CLASS_ERROR,)

    def test_unreadable_file(self, temp_dir):
        """Test the error for a missing file."""
        result = parse_component_file(str(temp_dir / "missing.component.ts"))

        assert result.value is None
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Unable to read component file:")

    def test_filename_fallback_with_namespace(self, write_project):
        """Test a component without doc tag or index file."""
        root = write_project({
            "src/utils/tag-name/constants.ts": PROJECT["src/utils/tag-name/constants.ts"],
            "src/components/iconBadge/iconBadge.component.ts": """
                export class IconBadge extends HTMLElement {}
            """,
        })

        result = parse_component_file(str(root / "src/components/iconBadge/iconBadge.component.ts"))

        assert result.value.tag_name == "mdc-icon-badge"
        assert result.tag_name_result.source == TagNameSource.FILENAME
        assert result.warnings == ()


class TestBatchParsing:
    """Test parsing several files against one program."""

    def test_parse_component_files(self, write_project):
        """Test aggregated results in input order."""
        root = write_project(PROJECT)

        aggregate = parse_component_files([
            str(root / BUTTON),
            str(root / "src/components/base/base.component.ts"),
            str(root / "src/components/none.component.ts"),
        ])

        assert [item.value.class_name if item.value else None for item in aggregate.items] == [
            "Button",
            "Component",
            None,
        ]
        assert len(aggregate.errors) == 1
        assert not aggregate.ok

    def test_parser_object(self, write_project):
        """Test the parser facade with in-editor source text."""
        root = write_project(PROJECT)
        parser = create_parser()

        result = parser.parse_source(
            str(root / "src/components/button/button.component.ts"),
            """
            /** @tagname mdc-pressable */
            export class Pressable extends HTMLElement {}
            """,
        )

        assert result.value.class_name == "Pressable"
        assert result.value.tag_name == "mdc-pressable"
        assert result.tag_name_result.source == TagNameSource.DOC_TAG

    def test_parser_object_batch(self, write_project):
        """Test that the parser facade shares its program across files."""
        root = write_project(PROJECT)
        parser = create_parser(ComponentMetaConfig(strict=True))

        aggregate = parser.parse_files([
            str(root / BUTTON),
            str(root / "src/components/base/base.component.ts"),
        ])

        assert [item.value.class_name for item in aggregate.items] == ["Button", "Component"]
        assert aggregate.errors == (
            "Unable to resolve base classes for: LitElement",
            "Unable to resolve base classes for: LitElement",
        )
        assert parser.program.load(str(root / "src/components/base/base.component.ts")) is not None


class TestUnifiedInterface:
    """Test language detection and the file entry point."""

    def test_language_from_extension(self):
        """Test the supported extensions."""
        assert get_language_from_extension("a.ts") == "typescript"
        assert get_language_from_extension("a.mjs") == "typescript"
        assert get_language_from_extension("a.tsx") == "tsx"

    def test_unsupported_extension(self):
        """Test that other files are rejected."""
        with pytest.raises(UnsupportedLanguageError):
            get_language_from_extension("a.py")
        with pytest.raises(UnsupportedLanguageError):
            parse_file("component.vue")

    def test_parse_file(self, write_project):
        """Test the top-level entry point."""
        root = write_project(PROJECT)

        result = parse_file(root / BUTTON)

        assert result.value.tag_name == "mdc-button"
