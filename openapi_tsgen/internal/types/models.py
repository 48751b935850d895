from enum import Enum
from typing import Optional, Union, Literal, Dict, List, Annotated

from pydantic import BaseModel, Field


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    BODY = "body"


class StringType(BaseModel):
    kind: Literal["string"] = "string"


class NumberType(BaseModel):
    kind: Literal["number"] = "number"


class BooleanType(BaseModel):
    kind: Literal["boolean"] = "boolean"


class VoidType(BaseModel):
    kind: Literal["void"] = "void"


class EnumType(BaseModel):
    kind: Literal["enum"] = "enum"
    values: list[str] = []

    # Выставляется резолвером имен enum
    assigned_name: Optional[str] = None

    def value_set(self) -> frozenset:
        return frozenset(self.values)


class ArrayType(BaseModel):
    kind: Literal["array"] = "array"
    element_type: "TypeNode"


class MapType(BaseModel):
    kind: Literal["map"] = "map"
    element_type: "TypeNode"


class FreeFormMapType(BaseModel):
    kind: Literal["free-form-map"] = "free-form-map"


class ObjectField(BaseModel):
    name: str
    type: "TypeNode"
    required: bool = False


class ObjectType(BaseModel):
    kind: Literal["object"] = "object"
    fields: list[ObjectField] = []

    def get_field(self, name: str) -> Optional[ObjectField]:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class ObjectCompositionType(BaseModel):
    kind: Literal["object-composition"] = "object-composition"
    parts: list["TypeNode"] = []


class RefType(BaseModel):
    """Ссылка на объявление в реестре по ключу, разыменовывается при генерации"""

    kind: Literal["ref"] = "ref"
    target: str


class UnionType(BaseModel):
    kind: Literal["union"] = "union"
    members: list["TypeNode"] = []

    discriminator_property_name: Optional[str] = None
    # значение тега -> ключ схемы в реестре
    discriminator_mapping: Dict[str, str] = {}

    fields_object: Optional[ObjectType] = None
    discriminator_type: Optional[RefType] = None


TypeNode = Annotated[
    Union[
        StringType,
        NumberType,
        BooleanType,
        VoidType,
        EnumType,
        ArrayType,
        MapType,
        FreeFormMapType,
        ObjectType,
        ObjectCompositionType,
        RefType,
        UnionType,
    ],
    Field(discriminator="kind"),
]


class TypeDeclaration(BaseModel):
    local_name: str
    registry_key: str
    type: "TypeNode"


class Parameter(BaseModel):
    location: ParameterLocation
    name: str
    type: "TypeNode"
    required: bool = False


class Operation(BaseModel):
    http_method: str
    route: str
    parameters: list[Parameter] = []
    flat_types: list["TypeNode"] = []
    result_type: "TypeNode" = VoidType()

    def parameters_in(self, location: ParameterLocation) -> List[Parameter]:
        return [p for p in self.parameters if p.location == location]


class ApiDescription(BaseModel):
    """Результат разбора: реестр объявлений, операции и синтезированные enum"""

    declarations: Dict[str, TypeDeclaration] = {}
    operations: list[Operation] = []
    enums: Dict[str, list[str]] = {}


for _model in (
    ArrayType,
    MapType,
    ObjectField,
    ObjectType,
    ObjectCompositionType,
    UnionType,
    TypeDeclaration,
    Parameter,
    Operation,
    ApiDescription,
):
    _model.model_rebuild()


class CodeBlock(BaseModel):
    order: int = 0
    code: str = ""

    def __str__(self):
        return self.code.replace("\t", "  ")


class CodeFile(BaseModel):
    file_name: str

    imports: list[str] = []
    code_blocks: list["CodeBlock"] = []

    def __str__(self):
        return (
            "\n\n".join(
                filter(
                    bool,
                    [
                        ("\n".join(self.imports) if self.imports else ""),
                        (
                            "\n\n".join(
                                map(
                                    str,
                                    sorted(
                                        self.code_blocks,
                                        key=lambda x: x.order,
                                        reverse=True,
                                    ),
                                )
                            )
                        ),
                    ],
                )
            )
            + "\n"
        ).replace("\t", "  ")

    def add_code_block(
        self, code_block: Union["CodeBlock", str], **kwargs
    ) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: list[CodeFile] = []

    def add_file(self, file_name: Union["CodeFile", str], **kwargs) -> "CodeFile":
        if isinstance(file_name, str):
            file_name = CodeFile(file_name=file_name, **kwargs)

        self.files.append(file_name)
        return file_name

    def get_file(self, file_name: str) -> Optional[CodeFile]:
        for code_file in self.files:
            if code_file.file_name == file_name:
                return code_file
        return None
