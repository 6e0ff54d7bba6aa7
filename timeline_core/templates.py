"""
Default code templates for the scene-graph runtime.

Each entry is a `str.format` template. Templates rendered with a dict use
keyword fields; templates rendered with a single value use field ``{0}``.
"""

CONTAINER = (
    "lib.{id} = class extends animate.Container {{\n"
    "    constructor() {{\n"
    "        super();\n"
    "        {contents}\n"
    "    }}\n"
    "}};\n"
)

SHAPE = 'lib.{0} = new animate.GraphicsData(lib.shapes["{0}"]);\n'

INSTANCE = "const {local_name} = new lib.{class_name}();"

MASKED_INSTANCE = "const {local_name} = new lib.{class_name}().setMask({mask});"

TEMPLATES = {
    "container": CONTAINER,
    "shape": SHAPE,
    "instance": INSTANCE,
    "masked_instance": MASKED_INSTANCE,
}
