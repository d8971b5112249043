from .models import DownloadOptions


def build_output_template(options: DownloadOptions) -> str:
    """
    Builds the yt-dlp ``-o`` template for the given options.

    Playlist downloads land in a folder named after the custom name or the
    playlist title, with files prefixed by their playlist index. Single
    downloads use the custom name or the video title as the file name.
    """
    output = options.output_dir.as_posix()
    if options.is_playlist:
        if options.name:
            return f"{output}/{options.name}/%(playlist_index)s - %(title)s.%(ext)s"
        return f"{output}/%(playlist_title)s/%(playlist_index)s - %(title)s.%(ext)s"
    if options.name:
        return f"{output}/{options.name}.%(ext)s"
    return f"{output}/%(title)s.%(ext)s"
