"""Tests for the command-line entry point"""
import json

import pytest
from PIL import Image

from isometric_city.cli import build_parser, main


def _args(tmp_path, *extra, name='city.png'):
    return [
        'Tokyo',
        '--grid-size', '8',
        '--width', '120',
        '--height', '120',
        '--seed', '1',
        '-o', str(tmp_path / name),
        *extra,
    ]


class TestParser:
    """Test argument defaults"""

    def test_defaults(self):
        args = build_parser().parse_args(['Paris'])
        assert args.grid_size == 20
        assert args.view == '3d'
        assert args.shape == 'square'
        assert args.weather == 'clear'
        assert args.frames == 1
        assert args.water_density == pytest.approx(0.15)

    def test_rejects_unknown_shape(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['Paris', '--shape', 'hexagon'])


class TestMain:
    """Test rendering to files"""

    def test_writes_png(self, tmp_path, capsys):
        assert main(_args(tmp_path)) == 0
        with Image.open(tmp_path / 'city.png') as image:
            assert image.size == (120, 120)
        out = capsys.readouterr().out
        assert 'Ultra-Dense' in out
        assert '✅ Saved' in out

    def test_flat_view(self, tmp_path):
        assert main(_args(tmp_path, '--view', '2d', '--shape', 'coastal')) == 0
        assert (tmp_path / 'city.png').exists()

    def test_animated_gif(self, tmp_path):
        args = _args(tmp_path, '--weather', 'rainy', '--frames', '3', name='city.gif')
        assert main(args) == 0
        with Image.open(tmp_path / 'city.gif') as image:
            assert image.size == (120, 120)
            assert getattr(image, 'n_frames', 1) > 1

    def test_export_json(self, tmp_path):
        json_path = tmp_path / 'out' / 'grid.json'
        assert main(_args(tmp_path, '--export-json', str(json_path))) == 0
        data = json.loads(json_path.read_text())
        assert data['gridSize'] == 8
        assert len(data['cells']) == 8

    def test_empty_prompt(self, tmp_path, capsys):
        assert main(['  ', '-o', str(tmp_path / 'city.png')]) == 1
        assert '❌ Error' in capsys.readouterr().out
        assert not (tmp_path / 'city.png').exists()

    def test_bad_grid_size(self, tmp_path):
        assert main(_args(tmp_path, '--grid-size', '0')) == 1

    def test_bad_frame_count(self, tmp_path):
        assert main(_args(tmp_path, '--frames', '0')) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
