"""Laravel generators: schema-builder migrations and Eloquent models."""

from typing import List, Sequence, Set

from ..database.models import BaseType, ColumnSchema, TableSchema
from ..database.naming import to_camel_case, to_pascal_case
from .base import SchemaGenerator, TIMESTAMP_COLUMNS
from .type_maps import LARAVEL_TYPES, LARAVEL_UNSIGNED


def php_string(value: str) -> str:
    """Quote a value as a single-quoted PHP string literal."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


class LaravelMigrationGenerator(SchemaGenerator):
    """Generates one anonymous Laravel migration class per table.

    created_at/updated_at/deleted_at are never emitted as columns; they
    collapse into the trailing timestamps() and softDeletes() directives.
    """

    description = "Laravel (Migration)"
    file_extension = "php"

    def column_call(self, col: ColumnSchema) -> str:
        """Build the schema-builder call for a column, without modifiers."""
        name = php_string(col.name)
        if col.auto_increment and col.is_primary:
            return "id()" if col.name == "id" else f"id({name})"

        parsed = col.parsed_type
        method = LARAVEL_TYPES.lookup(parsed)
        if parsed.unsigned and method in LARAVEL_UNSIGNED:
            method = LARAVEL_UNSIGNED[method]

        if method in ("string", "char") and parsed.base is BaseType.TEXT and parsed.length is not None:
            return f"{method}({name}, {parsed.length})"
        if method == "decimal" and parsed.precision is not None:
            scale = parsed.scale if parsed.scale is not None else 0
            return f"decimal({name}, {parsed.precision}, {scale})"
        if parsed.base is BaseType.UNKNOWN:
            return f"string({name}) /* {col.raw_type} */"
        return f"{method}({name})"

    def column_line(self, col: ColumnSchema) -> str:
        line = f"$table->{self.column_call(col)}"
        # Modifier order: nullable, default/useCurrent, unique
        if col.nullable:
            line += "->nullable()"
        if col.default is not None:
            if col.default.strip().lower() == "current_timestamp":
                line += "->useCurrent()"
            else:
                line += f"->default({php_string(col.default)})"
        if col.is_unique:
            line += "->unique()"
        return line + ";"

    def render_table(self, table: TableSchema) -> str:
        body: List[str] = []
        for col in table.columns:
            if col.name in TIMESTAMP_COLUMNS:
                continue
            body.append(self.column_line(col))

        for rel in table.relations:
            body.append(
                f"$table->foreign({php_string(rel.source_column)})"
                f"->references({php_string(rel.referenced_column)})"
                f"->on({php_string(rel.referenced_table)})"
                f"->onDelete('cascade');"
            )

        if self.has_timestamps(table):
            body.append("$table->timestamps();")
        if self.has_soft_deletes(table):
            body.append("$table->softDeletes();")

        lines = [
            "<?php",
            "",
            "use Illuminate\\Database\\Migrations\\Migration;",
            "use Illuminate\\Database\\Schema\\Blueprint;",
            "use Illuminate\\Support\\Facades\\Schema;",
            "",
            "return new class extends Migration",
            "{",
            "    /**",
            "     * Run the migrations.",
            "     */",
            "    public function up(): void",
            "    {",
            f"        Schema::create({php_string(table.name)}, function (Blueprint $table) {{",
        ]
        lines.extend(f"            {line}" for line in body)
        lines.extend([
            "        });",
            "    }",
            "",
            "    /**",
            "     * Reverse the migrations.",
            "     */",
            "    public function down(): void",
            "    {",
            f"        Schema::dropIfExists({php_string(table.name)});",
            "    }",
            "};",
        ])
        return "\n".join(lines)

    def render(self, tables: Sequence[TableSchema]) -> str:
        return self.join_blocks([self.render_table(t) for t in tables])


class LaravelModelGenerator(SchemaGenerator):
    """Generates one Eloquent model class per table."""

    description = "Laravel (Model)"
    file_extension = "php"

    def __init__(self, namespace: str = "App\\Models"):
        self.namespace = namespace

    @staticmethod
    def fillable(table: TableSchema) -> List[str]:
        """Columns that are mass assignable."""
        return [
            col.name for col in table.columns
            if not col.auto_increment and col.name not in TIMESTAMP_COLUMNS
        ]

    @staticmethod
    def casts(table: TableSchema) -> List[tuple]:
        """(column, cast) pairs for JSON and boolean columns."""
        result = []
        for col in table.columns:
            if col.parsed_type.base is BaseType.JSON:
                result.append((col.name, "array"))
            elif col.parsed_type.base is BaseType.BOOLEAN:
                result.append((col.name, "boolean"))
        return result

    def relation_methods(self, table: TableSchema) -> List[str]:
        taken: Set[str] = set()
        methods = []
        for rel in table.relations:
            column_base = rel.source_column[:-3] if rel.source_column.endswith("_id") else rel.source_column
            name = self.unique_name(
                to_camel_case(rel.referenced_table),
                taken,
                to_camel_case(column_base),
            )
            taken.add(name)
            methods.append("\n".join([
                f"    public function {name}(): BelongsTo",
                "    {",
                f"        return $this->belongsTo({to_pascal_case(rel.referenced_table)}::class, {php_string(rel.source_column)});",
                "    }",
            ]))
        return methods

    def render_table(self, table: TableSchema) -> str:
        class_name = to_pascal_case(table.name)
        soft_deletes = self.has_soft_deletes(table)

        lines = ["<?php", "", f"namespace {self.namespace};", ""]
        lines.append("use Illuminate\\Database\\Eloquent\\Factories\\HasFactory;")
        lines.append("use Illuminate\\Database\\Eloquent\\Model;")
        if table.relations:
            lines.append("use Illuminate\\Database\\Eloquent\\Relations\\BelongsTo;")
        if soft_deletes:
            lines.append("use Illuminate\\Database\\Eloquent\\SoftDeletes;")
        lines.append("")
        lines.append(f"class {class_name} extends Model")
        lines.append("{")
        lines.append(f"    /** @use HasFactory<\\Database\\Factories\\{class_name}Factory> */")
        lines.append("    use HasFactory;")
        if soft_deletes:
            lines.append("    use SoftDeletes;")
        lines.append("")
        lines.append(f"    protected $table = {php_string(table.name)};")
        if not self.has_timestamps(table):
            lines.append("")
            lines.append("    public $timestamps = false;")
        lines.append("")
        lines.append("    protected $fillable = [")
        lines.extend(f"        {php_string(name)}," for name in self.fillable(table))
        lines.append("    ];")
        lines.append("")
        lines.append("    /**")
        lines.append("     * @return array<string, string>")
        lines.append("     */")
        lines.append("    protected function casts(): array")
        lines.append("    {")
        lines.append("        return [")
        lines.extend(f"            {php_string(name)} => {php_string(cast)}," for name, cast in self.casts(table))
        lines.append("        ];")
        lines.append("    }")

        for method in self.relation_methods(table):
            lines.append("")
            lines.append(method)

        lines.append("}")
        return "\n".join(lines)

    def render(self, tables: Sequence[TableSchema]) -> str:
        return self.join_blocks([self.render_table(t) for t in tables])
