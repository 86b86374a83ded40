"""Tests for the placeholder value generators (crudgen.scaffolder.bindings).

Covers:
- Model fillable, casts, eager-load list and relation accessors
- Repository and service relation helpers
- Migration columns and foreign keys
- Validation rules
- Controller form data and Blade fragments
"""

from __future__ import annotations

import pytest

from crudgen.parser import CrudSpec, Relation, parse_spec
from crudgen.scaffolder import bindings


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class TestFillable:
    def test_default_spec(self, default_spec: CrudSpec):
        assert bindings.fillable_names(default_spec) == [
            "name", "email", "description", "created_by", "updated_by",
        ]

    def test_belongs_to_adds_foreign_key(self, post_spec: CrudSpec):
        assert bindings.fillable_names(post_spec) == [
            "title", "views", "price", "published", "meta",
            "created_by", "updated_by", "category_id",
        ]

    def test_no_duplicates(self):
        spec = parse_spec("Post", "category_id:integer,created_by:integer", "belongsTo:Category")
        names = bindings.fillable_names(spec)
        assert names == ["category_id", "created_by", "updated_by"]
        assert len(names) == len(set(names))

    def test_declared_foreign_key_emitted_once(self):
        spec = parse_spec("Post", "title:string,category_id:integer", "belongsTo:Category")

        migration = bindings.render_migration_fields(spec) + bindings.render_migration_foreign_keys(spec)
        assert migration.count("'category_id'") == 1
        assert "$table->foreignId('category_id')" in migration
        assert "integer('category_id')" not in migration

        rules = bindings.validation_rules(spec)
        assert [name for name, _ in rules] == ["title", "category_id"]
        assert dict(rules)["category_id"] == "required|exists:categories,id"

        form = bindings.render_form_fields(spec) + bindings.render_relation_fields(spec)
        assert form.count('name="category_id"') == 1
        assert '<select name="category_id"' in form

    def test_case_variant_belongs_to_emitted_once(self):
        spec = parse_spec("Post", "title:string", "belongsTo:Category,belongsTo:category")

        assert bindings.render_migration_foreign_keys(spec).count("foreignId('category_id')") == 1
        assert [name for name, _ in bindings.validation_rules(spec)] == ["title", "category_id"]
        assert bindings.render_relation_fields(spec).count("<select") == 1
        assert bindings.render_create_action(spec, "App").count("$categories =") == 1
        assert bindings.render_service_relations(spec).count("function getCategoryForPost(") == 1

    def test_only_belongs_to_adds_columns(self, relation_spec: CrudSpec):
        assert bindings.fillable_names(relation_spec) == [
            "title", "created_by", "updated_by", "author_id",
        ]

    def test_render(self, default_spec: CrudSpec):
        rendered = bindings.render_fillable(default_spec)
        assert rendered.startswith("        'name',\n")
        assert rendered.endswith("        'updated_by',\n")


class TestCasts:
    def test_cast_entries(self, post_spec: CrudSpec):
        assert bindings.cast_entries(post_spec) == [
            ("price", "decimal:2"),
            ("published", "boolean"),
            ("meta", "json"),
            ("created_at", "datetime"),
            ("updated_at", "datetime"),
            ("deleted_at", "datetime"),
        ]

    def test_uncast_types_are_omitted(self):
        spec = parse_spec("Post", "title:string,body:text,views:integer,stamp:timestamp")
        assert bindings.cast_entries(spec) == list(bindings.TIMESTAMP_CASTS)

    def test_array_is_cast_even_though_column_is_string(self):
        spec = parse_spec("Post", "tags:array")
        assert ("tags", "array") in bindings.cast_entries(spec)
        assert bindings.column_definition(spec.fields.get("tags")) == "string('tags')"

    def test_render(self, post_spec: CrudSpec):
        assert "        'price' => 'decimal:2',\n" in bindings.render_casts(post_spec)


class TestEagerLoads:
    def test_audit_relations_always_present(self, default_spec: CrudSpec):
        assert bindings.eager_loads(default_spec) == ["creator", "updater"]

    def test_known_relations_only(self, relation_spec: CrudSpec):
        assert bindings.eager_loads(relation_spec) == [
            "creator", "updater", "comments", "summary", "author",
            "tags", "images", "cover", "parent",
        ]


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------


class TestRelationMethodName:
    @pytest.mark.parametrize(
        "kind, related, expected",
        [
            ("hasMany", "Comment", "comments"),
            ("hasOne", "Profile", "profile"),
            ("belongsTo", "BlogCategory", "blogCategory"),
            ("belongsToMany", "Tag", "tags"),
            ("morphMany", "Image", "images"),
            ("morphOne", "Image", "image"),
            ("morphTo", "Imageable", "parent"),
            ("hasThrough", "Country", "country"),
        ],
    )
    def test_accessor_names(self, kind: str, related: str, expected: str):
        assert bindings.relation_method_name(Relation(kind=kind, related=related)) == expected


class TestRelationMethods:
    def test_has_many_body(self):
        method = bindings.relation_method(Relation(kind="hasMany", related="Comment"), "App")
        assert method == (
            "\n    public function comments()\n"
            "    {\n"
            "        return $this->hasMany(\\App\\Models\\Comment::class);\n"
            "    }\n"
        )

    def test_morph_to_has_no_class_argument(self):
        method = bindings.relation_method(Relation(kind="morphTo", related="Imageable"), "App")
        assert "return $this->morphTo();" in method

    def test_unknown_kind_renders_nothing(self):
        assert bindings.relation_method(Relation(kind="hasThrough", related="Country"), "App") == ""

    def test_custom_namespace(self):
        method = bindings.relation_method(Relation(kind="belongsTo", related="Category"), "Acme")
        assert "\\Acme\\Models\\Category::class" in method

    def test_render_relations_header_and_order(self, post_spec: CrudSpec):
        rendered = bindings.render_relations(post_spec, "App")
        assert rendered.startswith("\n    // Relationships\n")
        assert rendered.index("function category()") < rendered.index("function comments()")

    def test_render_relations_empty(self, default_spec: CrudSpec):
        assert bindings.render_relations(default_spec, "App") == ""

    def test_duplicate_accessor_rendered_once(self):
        spec = parse_spec("Image", "path:string", "morphTo:Imageable,morphTo:Commentable")
        assert bindings.render_relations(spec, "App").count("function parent()") == 1

    def test_unknown_only_renders_nothing(self):
        spec = parse_spec("Post", "title:string", "hasThrough:Country")
        assert bindings.render_relations(spec, "App") == ""


class TestRepositoryAndServiceRelations:
    def test_repository_helpers(self, relation_spec: CrudSpec):
        rendered = bindings.render_repository_relations(relation_spec)
        assert "public function withComment()" in rendered
        assert "return $this->model->with('comments')->get();" in rendered
        assert "public function withImageable()" in rendered
        assert "with('parent')" in rendered
        assert "withCountry" not in rendered

    def test_repository_empty(self, default_spec: CrudSpec):
        assert bindings.render_repository_relations(default_spec) == ""

    def test_service_helpers(self, relation_spec: CrudSpec):
        rendered = bindings.render_service_relations(relation_spec)
        assert "public function getCommentByArticle($id)" in rendered
        assert "return $article->comments;" in rendered
        assert "public function getAuthorForArticle($id)" in rendered
        assert "return $article->author;" in rendered
        assert "Tag" not in rendered

    def test_service_empty(self, default_spec: CrudSpec):
        assert bindings.render_service_relations(default_spec) == ""


# ---------------------------------------------------------------------------
# Migration
# ---------------------------------------------------------------------------


class TestMigration:
    @pytest.mark.parametrize(
        "declared, expected",
        [
            ("string", "string('f')"),
            ("text", "text('f')"),
            ("integer", "integer('f')"),
            ("decimal", "decimal('f', 8, 2)"),
            ("boolean", "boolean('f')"),
            ("date", "date('f')"),
            ("datetime", "dateTime('f')"),
            ("timestamp", "timestamp('f')"),
            ("json", "json('f')"),
            ("email", "string('f')"),
            ("uuid", "string('f')"),
        ],
    )
    def test_column_definition(self, declared: str, expected: str):
        spec = parse_spec("Post", f"f:{declared}")
        assert bindings.column_definition(spec.fields.get("f")) == expected

    def test_fields_in_declaration_order(self, post_spec: CrudSpec):
        lines = bindings.render_migration_fields(post_spec).splitlines()
        assert lines == [
            "            $table->string('title');",
            "            $table->integer('views');",
            "            $table->decimal('price', 8, 2);",
            "            $table->boolean('published');",
            "            $table->json('meta');",
        ]

    def test_foreign_keys(self, post_spec: CrudSpec):
        assert bindings.render_migration_foreign_keys(post_spec) == (
            "            $table->foreignId('category_id')"
            "->constrained('categories')->onDelete('cascade');\n"
        )

    def test_no_foreign_keys_without_belongs_to(self, relation_spec: CrudSpec):
        rendered = bindings.render_migration_foreign_keys(relation_spec)
        assert rendered.count("foreignId") == 1
        assert "author_id" in rendered


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.parametrize(
        "declared, expected",
        [
            ("string", "required|string|max:255"),
            ("text", "required|string"),
            ("email", "required|email"),
            ("integer", "required|integer"),
            ("decimal", "required"),
            ("boolean", "required"),
        ],
    )
    def test_rule_per_type(self, declared: str, expected: str):
        spec = parse_spec("Post", f"f:{declared}")
        assert bindings.validation_rule(spec.fields.get("f")) == expected

    def test_belongs_to_exists_rule(self, post_spec: CrudSpec):
        rules = dict(bindings.validation_rules(post_spec))
        assert rules["category_id"] == "required|exists:categories,id"

    def test_render(self, post_spec: CrudSpec):
        rendered = bindings.render_validation_rules(post_spec)
        assert "            'title' => 'required|string|max:255',\n" in rendered
        assert rendered.endswith("            'category_id' => 'required|exists:categories,id',\n")


# ---------------------------------------------------------------------------
# Controller form data
# ---------------------------------------------------------------------------


class TestControllerActions:
    def test_create_loads_belongs_to_targets(self, post_spec: CrudSpec):
        assert bindings.render_create_action(post_spec, "App") == (
            "        $categories = \\App\\Models\\Category::all();\n"
            "\n"
            "        return view('post.create', compact('categories'));"
        )

    def test_edit_passes_record_and_targets(self, post_spec: CrudSpec):
        rendered = bindings.render_edit_action(post_spec, "App")
        assert rendered.endswith("return view('post.edit', compact('post', 'categories'));")

    def test_without_relations(self, default_spec: CrudSpec):
        assert bindings.render_create_action(default_spec, "App") == (
            "        return view('blog-post.create');"
        )
        assert bindings.render_edit_action(default_spec, "App") == (
            "        return view('blog-post.edit', compact('blogPost'));"
        )


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


class TestViewFragments:
    def test_input_types(self):
        spec = parse_spec(
            "Post",
            "title:string,body:text,price:decimal,active:boolean,contact:email,due:date",
        )
        rendered = bindings.render_form_fields(spec)
        assert '<input type="text" name="title"' in rendered
        assert '<textarea name="body"' in rendered
        assert '<input type="number" step="0.01" name="price"' in rendered
        assert '<input type="checkbox" name="active"' in rendered
        assert '<input type="email" name="contact"' in rendered
        assert '<input type="date" name="due"' in rendered

    def test_form_field_label_and_old_value(self):
        spec = parse_spec("Post", "due_date:date")
        rendered = bindings.form_field(spec.fields.get("due_date"), "post")
        assert '<label for="due_date">Due Date</label>' in rendered
        assert "old('due_date', $post->due_date ?? '')" in rendered
        assert "@error('due_date')" in rendered

    def test_relation_select(self):
        rendered = bindings.relation_select(Relation(kind="belongsTo", related="BlogCategory"), "post")
        assert '<select name="blog_category_id" id="blog_category_id"' in rendered
        assert "Select Blog Category" in rendered
        assert "@foreach($blogCategories as $item)" in rendered

    def test_relation_fields_only_for_belongs_to(self, relation_spec: CrudSpec):
        rendered = bindings.render_relation_fields(relation_spec)
        assert rendered.count("<select") == 1

    def test_table_headers_and_rows(self, default_spec: CrudSpec):
        headers = bindings.render_table_headers(default_spec)
        rows = bindings.render_table_rows(default_spec)
        assert headers.splitlines()[0] == "                    <th>Name</th>"
        assert rows.splitlines()[2] == "                        <td>{{ $blogPost->description }}</td>"

    def test_show_fields(self, default_spec: CrudSpec):
        rendered = bindings.render_show_fields(default_spec)
        assert '            <dt class="col-sm-3">Email</dt>\n' in rendered
        assert '            <dd class="col-sm-9">{{ $blogPost->email }}</dd>\n' in rendered
