# dragokit

Pure-Python helpers for producing and editing game vertex data: mesh
transforms and shading, vertex-format packing, spatial chunking, sprite
sampling and atlas packing, value-noise heightmaps, and an editable terrain
heightfield with brush deformation. It has no dependencies outside the
standard library.

## Installation

```
pip install dragokit
```

To run the test suite:

```
pip install "dragokit[test]"
pytest
```

## Data layout

Meshes are flat lists of numbers. A full vertex holds eighteen values:
position (0-2), normal (3-5), texture coordinate (6-7), a packed 32-bit
colour (8), tangent (9-11), bitangent (12-14) and barycentric coordinate
(15-17). Functions that take a `vertex_size` default to 18. Colours and
pixels store red in the lowest byte, then green, blue and alpha.

## Modules

- `dragokit.spriteops`: pixel sampling with `sample`, `sample_vec4` and
  `sample_float`, each with `_pixel`, `_unfiltered` and `_pixel_unfiltered`
  variants; `merge` and `merge_vec4` for blending colours (`Vec4` holds
  channels in 0..1); `set_alpha` and `remove_transparent_colour`, which
  return new pixel lists; `get_cropped_dimensions` for the bounds of the
  pixels above an alpha cutoff.
- `dragokit.vertex_format`: `VertexFormat` flags, `format_vertex` and
  `format_vertices` for writing full vertices in a chosen layout, including
  compact packed normals, tangents and texture coordinates; `adjust` remaps
  a value between ranges.
- `dragokit.falcon`: `Falcon.combine` and `Falcon.combine_color` add
  per-batch position offsets (and a colour factor) to runs of vertices in a
  combined buffer, in place.
- `dragokit.mesh_geometry`: `get_bounds`, `transform_center`, `rotate_up`,
  `mirror_axis` with `mirror_axis_x/y/z`, `reverse` (winding),
  `flip_tex_u`, `flip_tex_v`, and `UVRemap` for remapping texture
  coordinates between rectangles. All but `get_bounds` change the buffer in
  place.
- `dragokit.mesh_shading`: `set_colour`, `set_alpha`,
  `set_colour_and_alpha`, `invert_alpha`, `blend_colour`,
  `multiply_colour`, `set_normals_flat`, `set_normals_smooth` and the
  `SmoothNormals` accumulator for smoothing across several buffers, and
  `export_d3d`, which returns the text of a D3D model file.
- `dragokit.chunking`: `ChunkGrid` assigns triangles to square chunks on the
  x/y plane; `analyze` counts vertices per chunk and `split` returns each
  chunk's vertices.
- `dragokit.sprite_atlas`: `Sprite` and `pack`, which places sprites in an
  atlas (updating their `x` and `y`) and returns the atlas size, optionally
  rounded up to powers of two.
- `dragokit.macaw`: `Macaw`, a seedable layered value-noise generator
  (`white_noise`, `smooth_noise`, `generate`), with `to_sprite` to turn
  values into grey pixels and `to_vbuff` to turn a grid into triangles.
- `dragokit.terrain_grid`: `Terrain`, a heightfield kept in step with a full
  and a reduced-detail vertex buffer (`get_z`, `set_z`, `add_z`,
  `to_heightmap`, `from_heightmap`, `flatten`, `apply_scale`,
  `generate_internal`, `generate_lod_internal`), plus `max_height`,
  `min_height`, `vertex_index` and the ray test `ray_triangle`.
- `dragokit.terrain_deform`: `deform` applies a `Brush` in a `DeformMode`
  (`MOLD`, `AVERAGE`, `ZERO`); `mutate` adds sampled `MutationLayer` noise
  and texture values to every height.

## Example

```python
from dragokit.macaw import Macaw, to_sprite
from dragokit.terrain_grid import Terrain
from dragokit.terrain_deform import Brush, DeformMode, deform
from dragokit.mesh_shading import set_normals_flat, export_d3d
from dragokit.sprite_atlas import Sprite, pack

noise = Macaw(height=10.0)
noise.seed(42)
heights = noise.generate(16, 16)

terrain = Terrain(16, 16, heights)
terrain.generate_internal()
brush = Brush([0xFFFFFFFF] * 16, 4, 4, radius=3, velocity=0.5, x=8, y=8)
deform(terrain, brush, DeformMode.MOLD)

pixels = to_sprite([h * 25.5 for h in terrain.heights])

triangle = [0.0] * 54
triangle[0:3] = [0.0, 0.0, 0.0]
triangle[18:21] = [1.0, 0.0, 0.0]
triangle[36:39] = [0.0, 1.0, 0.0]
set_normals_flat(triangle)
d3d_text = export_d3d(triangle)

sprites = [Sprite(32, 32), Sprite(16, 16), Sprite(8, 24)]
atlas_width, atlas_height = pack(sprites, stride=1, force_po2=True)
```

## What it does not do

- A `Terrain` keeps only position vertices in its buffers. There is no
  function here that builds full terrain meshes with normals, texture
  coordinates and vertex colours, and none that writes a terrain out as an
  OBJ or D3D file; `mesh_shading.export_d3d` writes any full-vertex buffer
  you have built yourself.
- It reads and writes no model or image files itself: everything goes in
  and comes out as Python lists and strings.
- It has no command-line program.