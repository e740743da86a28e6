"""
Unit tests for three-tier tag name resolution.
"""

import pytest

from component_meta.core.config import ComponentMetaConfig
from component_meta.core.errors import FileAccessError
from component_meta.core.file_access import MemoryFileAccess
from component_meta.core.models import TagNameSource
from component_meta.core.program import SourceProgram
from component_meta.core.webcomponent.ast_visitor import visit_source
from component_meta.core.webcomponent.discovery import discover_component_class
from component_meta.core.webcomponent.tagname_resolver import (
    MISSING_ARGUMENT_WARNING,
    TagNameResolver,
    resolve_tag_name,
)

COMPONENT_DIR = "/repo/src/components/widget"
COMPONENT = f"{COMPONENT_DIR}/widget.component.ts"
INDEX = f"{COMPONENT_DIR}/index.ts"
NAMESPACE_CONSTANTS = "/repo/src/utils/tag-name/constants.ts"

PLAIN_COMPONENT = """
    export class Widget extends HTMLElement {}
"""

NAMESPACE = """
    export const TAG_NAME_PREFIX = {
      PREFIX: 'mdc',
      SEPARATOR: '-',
    };
"""


@pytest.fixture
def resolve(program_for):
    """Resolve the tag name of the component in a {path: source} project."""
    def _resolve(files, config=None):
        files = dict(files)
        files.setdefault(COMPONENT, PLAIN_COMPONENT)
        program = program_for(files)
        unit = program.load(COMPONENT)
        facts = visit_source(unit)
        class_node = discover_component_class(facts).class_node
        return resolve_tag_name(program, COMPONENT, class_node, facts, config)
    return _resolve


class TestDocTagTier:
    """Test the `@tagname` doc tag tier."""

    def test_doc_tag_wins_over_registration(self, resolve):
        """Test that the doc tag is used verbatim even when an index file exists."""
        result = resolve({
            COMPONENT: """
                /** @tagname mdc-fancy */
                export class Widget extends HTMLElement {}
            """,
            INDEX: "Widget.register('x-other');",
        })

        assert result.tag_name == "mdc-fancy"
        assert result.source == TagNameSource.DOC_TAG
        assert result.warnings == ()

    def test_doc_tag_without_visitor_facts(self, program_for):
        """Test that the class's own doc comment is read when no facts are passed."""
        program = program_for({COMPONENT: """
            /** @tagname mdc-direct */
            export class Widget extends HTMLElement {}
        """})
        class_node = visit_source(program.load(COMPONENT)).classes[0]

        result = resolve_tag_name(program, COMPONENT, class_node)

        assert result.tag_name == "mdc-direct"
        assert result.source == TagNameSource.DOC_TAG

    def test_doc_tag_text_is_verbatim(self, resolve):
        """Test that inline markup is not stripped."""
        result = resolve({COMPONENT: """
            /** @tagname {@link Foo} */
            export class Widget extends HTMLElement {}
        """})

        assert result.tag_name == "{@link Foo}"


class TestRegistrationFileTier:
    """Test the index file `register(...)` tier."""

    def test_string_literal(self, resolve):
        """Test a literal argument."""
        result = resolve({INDEX: "Widget.register('x-widget');"})

        assert result.tag_name == "x-widget"
        assert result.source == TagNameSource.REGISTRATION_FILE
        assert result.warnings == ()

    def test_receiver_matching_class_is_preferred(self, resolve):
        """Test that the call on the component class wins over earlier calls."""
        result = resolve({INDEX: """
            Other.register('x-other');
            Widget.register('x-widget');
        """})

        assert result.tag_name == "x-widget"

    def test_first_call_without_matching_receiver(self, resolve):
        """Test that the first call is used when no receiver matches."""
        result = resolve({INDEX: """
            First.register('x-first');
            Second.register('x-second');
        """})

        assert result.tag_name == "x-first"

    def test_identifier_through_two_reexports(self, resolve):
        """Test a constant re-exported through two intermediate files."""
        result = resolve({
            INDEX: """
                import { Widget } from './widget.component';
                import { TAG_NAME } from './tag';
                Widget.register(TAG_NAME);
            """,
            f"{COMPONENT_DIR}/tag.ts": "export { TAG_NAME } from './shared';",
            f"{COMPONENT_DIR}/shared.ts": "export * from './values';",
            f"{COMPONENT_DIR}/values.ts": "export const TAG_NAME = 'mdc-widget';",
        })

        assert result.tag_name == "mdc-widget"
        assert result.source == TagNameSource.REGISTRATION_FILE
        assert result.warnings == ()

    def test_aliased_import_and_local_export_alias(self, resolve):
        """Test `import { A as B }` and `export { local as A }`."""
        result = resolve({
            INDEX: """
                import { WIDGET_TAG as TAG } from './names';
                Widget.register(TAG);
            """,
            f"{COMPONENT_DIR}/names.ts": """
                const LOCAL = 'x-alias';
                export { LOCAL as WIDGET_TAG };
            """,
        })

        assert result.tag_name == "x-alias"

    def test_local_constant(self, resolve):
        """Test a constant declared in the index file itself."""
        result = resolve({INDEX: """
            const TAG = 'x-local';
            Widget.register(TAG);
        """})

        assert result.tag_name == "x-local"

    def test_constants_fallback_file(self, resolve):
        """Test `./constants` resolving to `<component>.constants.ts`."""
        result = resolve({
            INDEX: """
                import { TAG_NAME } from './constants';
                Widget.register(TAG_NAME);
            """,
            f"{COMPONENT_DIR}/widget.constants.ts": "export const TAG_NAME = 'x-constant';",
        })

        assert result.tag_name == "x-constant"

    def test_construct_tag_name_is_namespaced(self, resolve):
        """Test `constructTagName` calls inline and behind a constant."""
        inline = resolve({
            INDEX: "Widget.register(constructTagName('widget'));",
            NAMESPACE_CONSTANTS: NAMESPACE,
        })
        behind_constant = resolve({
            INDEX: """
                import { TAG_NAME } from './widget.constants';
                Widget.register(TAG_NAME);
            """,
            f"{COMPONENT_DIR}/widget.constants.ts": """
                import utils from '../../utils/tag-name';
                export const TAG_NAME = utils.constructTagName('fancyWidget');
            """,
            NAMESPACE_CONSTANTS: NAMESPACE,
        })

        assert inline.tag_name == "mdc-widget"
        assert behind_constant.tag_name == "mdc-fancy-widget"

    def test_cyclic_reexports_terminate(self, resolve):
        """Test that `export *` cycles end with a warning and a file name fallback."""
        result = resolve({
            INDEX: """
                import { TAG_NAME } from './a';
                Widget.register(TAG_NAME);
            """,
            f"{COMPONENT_DIR}/a.ts": "export * from './b';",
            f"{COMPONENT_DIR}/b.ts": "export * from './a';",
        })

        assert result.tag_name == "widget"
        assert result.source == TagNameSource.FILENAME
        assert result.warnings == ("Unable to resolve tag name identifier: TAG_NAME",)

    def test_package_import_is_not_followed(self, resolve):
        """Test that a package-imported constant is unresolved."""
        result = resolve({INDEX: """
            import { TAG } from '@acme/tags';
            Widget.register(TAG);
        """})

        assert result.source == TagNameSource.FILENAME
        assert result.warnings == ("Unable to resolve tag name identifier: TAG",)

    def test_missing_argument_warns(self, resolve):
        """Test a `register()` call without arguments."""
        result = resolve({INDEX: "Widget.register();"})

        assert result.source == TagNameSource.FILENAME
        assert result.warnings == (MISSING_ARGUMENT_WARNING,)

    def test_unsupported_expression_warns(self, resolve):
        """Test an argument that is neither literal, identifier, nor helper call."""
        result = resolve({INDEX: "Widget.register(getTag());"})

        assert result.source == TagNameSource.FILENAME
        assert result.warnings == ("Unsupported register() tag expression: getTag()",)

    def test_empty_literal_falls_through_quietly(self, resolve):
        """Test that an empty tag literal falls back to the file name."""
        result = resolve({INDEX: "Widget.register('');"})

        assert result.source == TagNameSource.FILENAME
        assert result.warnings == ()

    def test_configured_index_names(self, resolve):
        """Test that index file candidates come from configuration."""
        config = ComponentMetaConfig(index_file_names=["register.ts"])
        result = resolve({f"{COMPONENT_DIR}/register.ts": "Widget.register('x-configured');"}, config)

        assert result.tag_name == "x-configured"


class TestFilenameTier:
    """Test the file name tier."""

    def test_missing_index_falls_back_silently(self, resolve):
        """Test that no index file means no warning."""
        result = resolve({})

        assert result.tag_name == "widget"
        assert result.source == TagNameSource.FILENAME
        assert result.warnings == ()

    def test_undecodable_index_falls_back_silently(self, temp_dir):
        """Test that an index file that exists but cannot be decoded gives no warning."""
        component_dir = temp_dir / "src" / "components" / "widget"
        component_dir.mkdir(parents=True)
        component = component_dir / "widget.component.ts"
        component.write_text(PLAIN_COMPONENT)
        (component_dir / "index.ts").write_bytes(b"Widget.register('\xff\xfe');")
        program = SourceProgram()

        result = TagNameResolver(program).resolve(str(component), str(component_dir))

        assert result.tag_name == "widget"
        assert result.source == TagNameSource.FILENAME
        assert result.warnings == ()

    def test_failing_read_falls_back_silently(self, memory_files):
        """Test that a read error on an existing index file gives no warning."""
        class FailingIndexAccess(MemoryFileAccess):
            def read(self, path):
                if path.endswith("/index.ts"):
                    raise FileAccessError(path, "permission denied")
                return super().read(path)

        files = memory_files({COMPONENT: PLAIN_COMPONENT, INDEX: "Widget.register('x-widget');"})
        program = SourceProgram(FailingIndexAccess(files.files))

        result = TagNameResolver(program).resolve(COMPONENT)

        assert result.tag_name == "widget"
        assert result.source == TagNameSource.FILENAME
        assert result.warnings == ()

    def test_namespace_prefix(self, resolve):
        """Test that the namespace constants prefix the derived name."""
        result = resolve({NAMESPACE_CONSTANTS: NAMESPACE})

        assert result.tag_name == "mdc-widget"

    def test_kebab_cases_the_file_name(self, program_for):
        """Test camelCase file names."""
        resolver = TagNameResolver(program_for({}))

        assert resolver.from_filename("/repo/x/fancyButton.component.ts", "/repo/x") == "fancy-button"
        assert resolver.from_filename("/repo/x/IconBadge.tsx", "/repo/x") == "icon-badge"

    def test_empty_stem_uses_directory_then_default(self, program_for):
        """Test that the file name tier always produces a name."""
        resolver = TagNameResolver(program_for({}))

        assert resolver.from_filename("/repo/cards/.component.ts", "/repo/cards") == "cards"
        assert resolver.from_filename("/.component.ts", "/") == "component"
