from pathlib import Path
from PIL import Image
from framefit.imaging.pipeline import process
from framefit.models.settings import ProcessingSettings, CustomTarget, Background
from framefit.models.enums import FitMode, OutputFormat

tmp = Path('example_out')
tmp.mkdir(parents=True, exist_ok=True)
src = tmp / 'in.png'
Image.new('RGB', (400, 200), (128, 128, 128)).save(src)

settings = ProcessingSettings(
    target=CustomTarget(300, 300), format=OutputFormat.PNG,
    fit_mode=FitMode.CONTAIN, background=Background.parse('transparent'),
)

with process(src, settings) as result:
    (tmp / result.filename).write_bytes(result.data)
    print('Saved:', result.filename, (result.width, result.height), result.size_bytes, 'bytes')
